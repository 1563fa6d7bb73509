"""Config loader for connector settings.

Search order: ./athena-connector.toml -> ./athena.toml -> platform config.
Uses stdlib tomllib (Python 3.11+).

Example::

    region = "us-east-1"

    [options]
    database = "analytics"
    outputBucket = "my-athena-results/evidence"

    [polling]
    interval_seconds = 2

    [results]
    invalid_dates = "error"
"""

from __future__ import annotations

import os
import platform
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from athena_connector.config.settings import ConnectorOptions, ConnectorSettings, PollingConfig

APP_DIR_NAME = "athena-connector"


def get_platform_config_path() -> Path:
    """Return the platform-specific config.toml path."""
    system = platform.system().lower()
    if system == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME / "config.toml"
    if system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_DIR_NAME / "config.toml"
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME / "config.toml"

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_DIR_NAME / "config.toml"
    return Path.home() / ".config" / APP_DIR_NAME / "config.toml"


def get_config_search_paths() -> list[Path]:
    """Return config search paths in priority order."""
    return [
        Path("./athena-connector.toml"),
        Path("./athena.toml"),
        get_platform_config_path(),
    ]


def _find_config_file() -> Path | None:
    for path in get_config_search_paths():
        if path.exists():
            return path
    return None


def _parse_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def resolve_config_path(config_path: Path | None = None) -> Path:
    """Resolve the config path used for display or creation."""
    if config_path:
        return config_path
    return _find_config_file() or get_platform_config_path()


def merge_cli_overrides(
    settings: ConnectorSettings, overrides: Mapping[str, Any]
) -> ConnectorSettings:
    """Apply CLI overrides to loaded settings.

    ``None`` values mean "not given on the command line" and are skipped.
    """
    option_overrides = {
        key: overrides[key]
        for key in ("database", "catalog", "output_bucket", "test_table_name")
        if overrides.get(key) is not None
    }
    if option_overrides:
        merged = {**settings.options.model_dump(), **option_overrides}
        settings.options = ConnectorOptions.model_validate(merged)

    if overrides.get("region") is not None:
        settings.region = str(overrides["region"])

    if overrides.get("workgroup") is not None:
        settings.workgroup = str(overrides["workgroup"])

    if overrides.get("probe_connection") is not None:
        settings.probe_connection = bool(overrides["probe_connection"])

    polling_overrides = {
        field: overrides[key]
        for key, field in (("poll_interval", "interval_seconds"), ("max_attempts", "max_attempts"))
        if overrides.get(key) is not None
    }
    if polling_overrides:
        merged = {**settings.polling.model_dump(), **polling_overrides}
        settings.polling = PollingConfig.model_validate(merged)

    return settings


def load_settings(
    config_path: Path | None = None, *, cli_overrides: Mapping[str, Any] | None = None
) -> ConnectorSettings:
    """Load connector settings from a TOML file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.
        cli_overrides: Optional CLI overrides to apply after loading.

    Returns:
        ConnectorSettings with loaded or default values.

    Raises:
        FileNotFoundError: If an explicit config_path is provided but does not exist.
        RuntimeError: If the file cannot be parsed.
        pydantic.ValidationError: If a CLI override breaks a setting constraint.
    """
    if config_path:
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at explicitly provided path: {config_path}. "
                "Ensure the file exists or omit the argument to use default search paths."
            )
        path: Path | None = config_path
    else:
        path = _find_config_file()

    data: dict[str, Any] = {}
    if path is not None:
        try:
            data = _parse_toml(path)
        except Exception as e:
            raise RuntimeError(f"Failed to parse configuration file at {path}: {e}") from e

    settings = ConnectorSettings.model_validate(data)
    if cli_overrides:
        settings = merge_cli_overrides(settings, cli_overrides)
    return settings
