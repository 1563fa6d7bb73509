"""Host-facing contract for the connector.

The host framework loads a connector, hands it the user's options, and calls
the query runner once per query file. The runner returns typed rows plus a
column description in the host's generic type system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Protocol

from athena_connector.config.settings import ConnectorOptions


class EvidenceType(str, Enum):
    """Generic column types understood by the host."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    STRING = "string"


class TypeFidelity(str, Enum):
    """Whether a column type is authoritative or guessed from sampled values."""

    PRECISE = "precise"
    INFERRED = "inferred"


@dataclass(frozen=True)
class ColumnType:
    name: str
    evidence_type: EvidenceType
    type_fidelity: TypeFidelity = TypeFidelity.PRECISE

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "evidenceType": self.evidence_type.value,
            "typeFidelity": self.type_fidelity.value,
        }


@dataclass
class RawResultSet:
    """Accumulated ``GetQueryResults`` pages.

    ``rows`` are Athena ``Row`` dicts with the header row first; ``columns``
    are the ``ColumnInfo`` entries of the first page.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    columns: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class MappedOutput:
    """Rows keyed by column name, plus column types in result order."""

    rows: list[dict[str, Any]]
    column_types: list[ColumnType]
    expected_row_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.rows,
            "columnTypes": [column.to_dict() for column in self.column_types],
            "expectedRowCount": self.expected_row_count,
        }


@dataclass(frozen=True)
class QueryOutcome:
    """Result of one query runner invocation.

    Failures are reported here rather than raised, so the host always receives
    either an output or an error description.
    """

    status: Literal["ok", "error"]
    output: MappedOutput | None = None
    execution_id: str | None = None
    error_type: str | None = None
    error_message: str | None = None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(cls, output: MappedOutput, *, execution_id: str | None = None) -> QueryOutcome:
        return cls(status="ok", output=output, execution_id=execution_id)

    @classmethod
    def failure(cls, exc: BaseException, *, execution_id: str | None = None) -> QueryOutcome:
        return cls(
            status="error",
            execution_id=execution_id,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )


class QueryRunner(Protocol):
    def __call__(self, query_text: str, query_path: str | None = None) -> QueryOutcome:
        """Run one query file's SQL and return its outcome.

        Args:
            query_text: SQL passed to Athena unchanged.
            query_path: Source file of the query, used for logging only.
        """
        ...


class ConnectionTester(Protocol):
    def __call__(self, options: ConnectorOptions) -> bool:
        """Report whether a connection with ``options`` is usable."""
        ...
