# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/
"""

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings
from sqlalchemy import Engine, Table, select

from errorledger.core.storage import ErrorDB

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # SQLite timing varies
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def error_db(tmp_path: Path) -> Iterator[ErrorDB]:
    """File-backed SQLite database so committed rows are visible to new connections."""
    with ErrorDB(f"sqlite:///{tmp_path / 'errors.db'}") as db:
        yield db


def _fetch_rows(engine: Engine, table: Table) -> list[dict[str, Any]]:
    """Read committed rows of a table on a fresh connection."""
    with engine.connect() as conn:
        result = conn.execute(select(table).order_by(*table.c))
        return [dict(row._mapping) for row in result]


@pytest.fixture
def fetch_rows() -> Callable[[Engine, Table], list[dict[str, Any]]]:
    return _fetch_rows
