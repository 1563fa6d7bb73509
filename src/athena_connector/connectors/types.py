"""Athena column type to host type mapping.

Matching is exact and case-sensitive on the ``Type`` of a ``ColumnInfo``.
Unknown tags fall back to STRING, so every column gets a type.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from athena_connector.connectors.interface import ColumnType, EvidenceType, TypeFidelity

_ATHENA_TYPES: Mapping[str, EvidenceType] = {
    "boolean": EvidenceType.BOOLEAN,
    # Numeric
    "tinyint": EvidenceType.NUMBER,
    "smallint": EvidenceType.NUMBER,
    "int": EvidenceType.NUMBER,
    "integer": EvidenceType.NUMBER,
    "bigint": EvidenceType.NUMBER,
    "double": EvidenceType.NUMBER,
    "float": EvidenceType.NUMBER,
    "real": EvidenceType.NUMBER,
    # Temporal
    "date": EvidenceType.DATE,
    "timestamp": EvidenceType.DATE,
    # Text
    "string": EvidenceType.STRING,
    "char": EvidenceType.STRING,
    "varchar": EvidenceType.STRING,
    # Rendered as text by Athena
    "array": EvidenceType.STRING,
    "map": EvidenceType.STRING,
    "struct": EvidenceType.STRING,
    "decimal": EvidenceType.STRING,
    "binary": EvidenceType.STRING,
}

FALLBACK_TYPE = EvidenceType.STRING


def evidence_type_for(athena_type: str | None) -> EvidenceType:
    """Map a bare Athena type tag to a host type."""
    if athena_type is None:
        return FALLBACK_TYPE
    return _ATHENA_TYPES.get(athena_type, FALLBACK_TYPE)


def map_athena_type_to_evidence_type(column: Mapping[str, Any]) -> ColumnType:
    """Map an Athena ``ColumnInfo`` entry to a precise host column type."""
    return ColumnType(
        name=column["Name"],
        evidence_type=evidence_type_for(column.get("Type")),
        type_fidelity=TypeFidelity.PRECISE,
    )
