"""Athena data-source connector for SQL reporting tools."""

from athena_connector.client import client_from_environment, create_athena_client
from athena_connector.config import ConnectorOptions, ConnectorSettings
from athena_connector.connectors import (
    AthenaConnector,
    ColumnType,
    EvidenceType,
    MappedOutput,
    QueryOutcome,
    TypeFidelity,
)

__version__ = "0.1.0"

__all__ = [
    "AthenaConnector",
    "ColumnType",
    "ConnectorOptions",
    "ConnectorSettings",
    "EvidenceType",
    "MappedOutput",
    "QueryOutcome",
    "TypeFidelity",
    "__version__",
    "client_from_environment",
    "create_athena_client",
]
