"""Entry points the host framework calls.

``options`` describes the configuration fields, ``get_runner`` returns the
per-file query runner and ``test_connection`` checks a configuration. A client
may be passed in; otherwise one is built from the ``AUX_PROFILE`` environment
variable, and a missing variable fails before any query can run.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from athena_connector.client import client_from_environment
from athena_connector.config.settings import OPTIONS_SCHEMA, ConnectorOptions, ConnectorSettings
from athena_connector.connectors import AthenaConnector, QueryRunner

options = OPTIONS_SCHEMA


def _coerce_options(raw: ConnectorOptions | Mapping[str, Any]) -> ConnectorOptions:
    if isinstance(raw, ConnectorOptions):
        return raw
    return ConnectorOptions.model_validate(dict(raw))


def build_connector(
    connector_options: ConnectorOptions | Mapping[str, Any],
    *,
    client: Any = None,
    settings: ConnectorSettings | None = None,
) -> AthenaConnector:
    """Build a connector for ``connector_options``.

    ``settings`` supplies region, polling and result handling; its own
    ``options`` are replaced by ``connector_options``.
    """
    base = settings or ConnectorSettings()
    merged = base.model_copy(update={"options": _coerce_options(connector_options)})
    if client is None:
        client = client_from_environment(region=merged.region)
    return AthenaConnector.from_settings(client, merged)


def get_runner(
    connector_options: ConnectorOptions | Mapping[str, Any],
    *,
    client: Any = None,
    settings: ConnectorSettings | None = None,
) -> QueryRunner:
    return build_connector(connector_options, client=client, settings=settings).get_runner()


def test_connection(
    connector_options: ConnectorOptions | Mapping[str, Any],
    *,
    client: Any = None,
    settings: ConnectorSettings | None = None,
) -> bool:
    return build_connector(connector_options, client=client, settings=settings).test_connection()
