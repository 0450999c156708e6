"""errorledger: append-only error storage for batch validation runs."""

__version__ = "0.1.0"
