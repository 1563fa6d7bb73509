"""Tests for the host-facing plugin entry points."""

from __future__ import annotations

import pytest

from athena_connector import plugin
from athena_connector.client import PROFILE_ENV_VAR
from athena_connector.config import ConnectorOptions, ConnectorSettings, PollingConfig
from athena_connector.connectors import ConnectionTester
from athena_connector.errors import MissingProfileError
from tests.fixtures.fake_athena import FakeAthenaClient, column, page, row


def test_options_schema_is_exposed() -> None:
    assert set(plugin.options) == {"database", "catalog", "outputBucket", "testTableName"}
    assert plugin.options["catalog"]["default"] == "AWSDataCatalog"


def test_get_runner_accepts_host_mapping() -> None:
    client = FakeAthenaClient(
        pages=[page([row("n"), row("1"), row("2")], [column("n", "bigint")])]
    )
    runner = plugin.get_runner(
        {"database": "analytics", "outputBucket": "bucket/prefix"}, client=client
    )

    outcome = runner("select n from t", "pages/index.sql")

    assert outcome.is_ok
    assert outcome.output is not None
    assert outcome.output.expected_row_count == 2
    start = client.start_calls[0]
    assert start["QueryExecutionContext"]["Database"] == "analytics"
    assert start["ResultConfiguration"]["OutputLocation"] == "s3://bucket/prefix"


def test_settings_apply_but_options_win() -> None:
    client = FakeAthenaClient(states=["RUNNING"])
    settings = ConnectorSettings.model_validate(
        {"options": {"database": "ignored"}, "workgroup": "wg"}
    )
    settings.polling = PollingConfig(interval_seconds=0, max_attempts=2)

    connector = plugin.build_connector({"database": "used"}, client=client, settings=settings)
    outcome = connector.run("select 1")

    assert outcome.error_type == "QueryTimeoutError"
    assert client.start_calls[0]["QueryExecutionContext"]["Database"] == "used"
    assert client.start_calls[0]["WorkGroup"] == "wg"


def test_test_connection_defaults_to_true() -> None:
    client = FakeAthenaClient(start_error=RuntimeError("not expected"))
    assert plugin.test_connection({"database": "analytics"}, client=client) is True


def test_missing_profile_fails_at_construction(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
    with pytest.raises(MissingProfileError):
        plugin.get_runner({"database": "analytics"})


def test_test_connection_satisfies_host_contract(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeAthenaClient(states=["SUCCEEDED"])
    monkeypatch.setattr(plugin, "client_from_environment", lambda **_: client)

    tester: ConnectionTester = plugin.test_connection
    assert tester(ConnectorOptions(database="analytics", testTableName="orders")) is True
    assert client.start_calls == []
