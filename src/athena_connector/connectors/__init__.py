"""Connectors package - Athena query execution and result typing."""

from athena_connector.connectors.athena import AthenaConnector
from athena_connector.connectors.formatter import map_query_results, parse_athena_datetime
from athena_connector.connectors.interface import (
    ColumnType,
    ConnectionTester,
    EvidenceType,
    MappedOutput,
    QueryOutcome,
    QueryRunner,
    RawResultSet,
    TypeFidelity,
)
from athena_connector.connectors.types import evidence_type_for, map_athena_type_to_evidence_type

__all__ = [
    "AthenaConnector",
    "ColumnType",
    "ConnectionTester",
    "EvidenceType",
    "MappedOutput",
    "QueryOutcome",
    "QueryRunner",
    "RawResultSet",
    "TypeFidelity",
    "evidence_type_for",
    "map_athena_type_to_evidence_type",
    "map_query_results",
    "parse_athena_datetime",
]
