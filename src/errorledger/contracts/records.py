"""Error records handed from validators to the error store.

These types answer: "What went wrong, and which entities caused it?"

IMPORTANT:
- Records are frozen. The store assigns ids; records never carry one.
- line_number uses a negative sentinel for "unknown"
- sequence_number uses None for "not applicable" (0 is a valid position)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

# Validators generate line numbers themselves, so negative is safe as "missing".
LINE_NUMBER_UNKNOWN = -1


@dataclass(frozen=True)
class EntityReference:
    """Pointer from an error to the entity that triggered it."""

    entity_type: str
    line_number: int = LINE_NUMBER_UNKNOWN
    entity_id: str = ""
    sequence_number: int | None = None

    @classmethod
    def for_entity(
        cls,
        entity: Any,
        *,
        line_number: int = LINE_NUMBER_UNKNOWN,
        entity_id: str = "",
        sequence_number: int | None = None,
    ) -> "EntityReference":
        """Create a reference typed by the entity's class name."""
        return cls(
            entity_type=type(entity).__name__,
            line_number=line_number,
            entity_id=entity_id,
            sequence_number=sequence_number,
        )

    @property
    def has_line_number(self) -> bool:
        """Whether the physical input line is known."""
        return self.line_number >= 0


@dataclass(frozen=True)
class InfoEntry:
    """Key/value annotation for an error.

    Reserved: the error_info table exists for it, but nothing writes
    these rows yet.
    """

    key: str
    value: str


@dataclass(frozen=True)
class ErrorRecord:
    """One validation failure.

    Use with_reference() / with_detail() to derive new records.
    """

    kind: str | Enum
    detail: str = ""
    references: tuple[EntityReference, ...] = ()

    def __post_init__(self) -> None:
        if self.detail is None:
            raise ValueError("detail must be a string, use '' for no detail")
        # Accept any sequence from callers, store an immutable tuple
        if not isinstance(self.references, tuple):
            object.__setattr__(self, "references", tuple(self.references))

    @property
    def kind_name(self) -> str:
        """Symbolic name stored in the errors.type column."""
        if isinstance(self.kind, Enum):
            return self.kind.name
        return self.kind

    def with_reference(self, reference: EntityReference) -> "ErrorRecord":
        return replace(self, references=(*self.references, reference))

    def with_detail(self, detail: str) -> "ErrorRecord":
        return replace(self, detail=detail)
