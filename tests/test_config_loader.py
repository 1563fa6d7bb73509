"""Tests for connector options and the config loader."""

from __future__ import annotations

import platform
from pathlib import Path
from textwrap import dedent
from typing import Any

import pytest
from pydantic import ValidationError

from athena_connector.config import (
    OPTIONS_SCHEMA,
    ConnectorOptions,
    ConnectorSettings,
    DateParsing,
    get_platform_config_path,
    load_settings,
    resolve_config_path,
)


def test_options_defaults() -> None:
    options = ConnectorOptions()
    assert options.catalog == "AWSDataCatalog"
    assert options.database is None
    assert options.output_location is None


def test_options_accept_host_and_python_names() -> None:
    host = ConnectorOptions.model_validate(
        {"database": "db", "outputBucket": "bucket", "testTableName": "t"}
    )
    python = ConnectorOptions(database="db", output_bucket="bucket", test_table_name="t")
    assert host == python
    assert host.output_location == "s3://bucket"


def test_output_location_keeps_existing_scheme() -> None:
    options = ConnectorOptions(output_bucket="s3://bucket/prefix/")
    assert options.output_location == "s3://bucket/prefix/"


def test_options_are_immutable() -> None:
    options = ConnectorOptions(database="db")
    with pytest.raises(ValidationError):
        options.database = "other"  # type: ignore[misc]


def test_options_schema_shape() -> None:
    assert list(OPTIONS_SCHEMA) == ["database", "catalog", "outputBucket", "testTableName"]
    assert OPTIONS_SCHEMA["catalog"]["default"] == "AWSDataCatalog"
    assert OPTIONS_SCHEMA["outputBucket"]["title"] == "output_bucket"
    assert all(entry["type"] == "string" for entry in OPTIONS_SCHEMA.values())
    assert "default" not in OPTIONS_SCHEMA["database"]


def test_settings_defaults() -> None:
    settings = ConnectorSettings()
    assert settings.region == "us-east-1"
    assert settings.polling.interval_seconds == 5.0
    assert settings.polling.max_attempts is None
    assert settings.polling.timeout_seconds is None
    assert settings.results.invalid_dates is DateParsing.null
    assert settings.probe_connection is False


def test_load_settings_from_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "athena-connector.toml"
    config_file.write_text(
        dedent("""
        region = "eu-west-1"
        workgroup = "reporting"
        probe_connection = true

        [options]
        database = "analytics"
        outputBucket = "my-results"
        testTableName = "orders"

        [polling]
        interval_seconds = 1.5
        max_attempts = 120

        [results]
        page_size = 500
        invalid_dates = "error"
        """)
    )

    settings = load_settings(config_file)

    assert settings.region == "eu-west-1"
    assert settings.workgroup == "reporting"
    assert settings.probe_connection is True
    assert settings.options.database == "analytics"
    assert settings.options.output_location == "s3://my-results"
    assert settings.options.test_table_name == "orders"
    assert settings.polling.interval_seconds == 1.5
    assert settings.polling.max_attempts == 120
    assert settings.results.page_size == 500
    assert settings.results.invalid_dates is DateParsing.error


def test_cli_overrides_win(tmp_path: Path) -> None:
    config_file = tmp_path / "athena.toml"
    config_file.write_text('[options]\ndatabase = "from_file"\ncatalog = "other"\n')

    settings = load_settings(
        config_file,
        cli_overrides={"database": "from_cli", "catalog": None, "max_attempts": 4},
    )

    assert settings.options.database == "from_cli"
    assert settings.options.catalog == "other"
    assert settings.polling.max_attempts == 4


def test_polling_overrides_keep_file_values(tmp_path: Path) -> None:
    config_file = tmp_path / "athena.toml"
    config_file.write_text("[polling]\ninterval_seconds = 2\ntimeout_seconds = 60\n")

    settings = load_settings(config_file, cli_overrides={"poll_interval": 0.5})

    assert settings.polling.interval_seconds == 0.5
    assert settings.polling.timeout_seconds == 60


@pytest.mark.parametrize(
    "overrides", [{"poll_interval": -1}, {"max_attempts": 0}, {"max_attempts": -3}]
)
def test_invalid_polling_override_is_rejected(tmp_path: Path, overrides: dict[str, Any]) -> None:
    config_file = tmp_path / "athena.toml"
    config_file.write_text('region = "us-east-1"\n')

    with pytest.raises(ValidationError):
        load_settings(config_file, cli_overrides=overrides)


def test_load_settings_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.toml")


def test_load_settings_invalid_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "athena.toml"
    config_file.write_text("region = [unterminated")
    with pytest.raises(RuntimeError, match="Failed to parse"):
        load_settings(config_file)


def test_load_settings_searches_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "athena.toml").write_text('region = "ap-south-1"\n')

    assert load_settings().region == "ap-south-1"
    assert resolve_config_path() == Path("./athena.toml")


def test_page_size_is_bounded() -> None:
    with pytest.raises(ValidationError):
        ConnectorSettings.model_validate({"results": {"page_size": 5000}})


def test_get_platform_config_path_darwin(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Darwin")
    path = get_platform_config_path()
    assert path == (
        Path.home() / "Library" / "Application Support" / "athena-connector" / "config.toml"
    )


def test_get_platform_config_path_linux(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", "/tmp/config")
    path = get_platform_config_path()
    assert path == Path("/tmp/config") / "athena-connector" / "config.toml"


def test_get_platform_config_path_windows(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Windows")
    monkeypatch.setenv("APPDATA", "C:/Users/Test/AppData/Roaming")
    path = get_platform_config_path()
    assert path == Path("C:/Users/Test/AppData/Roaming") / "athena-connector" / "config.toml"
