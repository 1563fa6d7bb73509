from athena_connector.config.loader import (
    get_platform_config_path,
    load_settings,
    merge_cli_overrides,
    resolve_config_path,
)
from athena_connector.config.settings import (
    DEFAULT_CATALOG,
    OPTIONS_SCHEMA,
    ConnectorOptions,
    ConnectorSettings,
    DateParsing,
    PollingConfig,
    ResultsConfig,
    options_schema,
)

__all__ = [
    "DEFAULT_CATALOG",
    "OPTIONS_SCHEMA",
    "ConnectorOptions",
    "ConnectorSettings",
    "DateParsing",
    "PollingConfig",
    "ResultsConfig",
    "get_platform_config_path",
    "load_settings",
    "merge_cli_overrides",
    "options_schema",
    "resolve_config_path",
]
