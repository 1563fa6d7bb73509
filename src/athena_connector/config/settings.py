from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from athena_connector.client import DEFAULT_REGION

DEFAULT_CATALOG = "AWSDataCatalog"
DEFAULT_POLL_INTERVAL_SECONDS = 5.0


class ConnectorOptions(BaseModel):
    """Per-connection options supplied by the host from user configuration.

    Field aliases are the camelCase names the host uses; snake_case names are
    accepted as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    database: str | None = Field(default=None, description="AWS glue database to query")
    catalog: str = Field(
        default=DEFAULT_CATALOG,
        description="AWS Athena catalog to use for the query, defaults to AWSDataCatalog",
    )
    output_bucket: str | None = Field(
        default=None,
        alias="outputBucket",
        description="AWS S3 Output bucket name for athena query",
    )
    test_table_name: str | None = Field(
        default=None,
        alias="testTableName",
        description=(
            "Name of a athena table name to do a test query (select first row) "
            "to validate the connection"
        ),
    )

    @property
    def output_location(self) -> str | None:
        if not self.output_bucket:
            return None
        if self.output_bucket.startswith("s3://"):
            return self.output_bucket
        return f"s3://{self.output_bucket}"


def options_schema() -> dict[str, dict[str, Any]]:
    """Describe the connector options in the host's options-schema shape."""
    schema: dict[str, dict[str, Any]] = {}
    for name, field in ConnectorOptions.model_fields.items():
        entry: dict[str, Any] = {
            "title": name,
            "description": field.description,
            "type": "string",
        }
        if field.default is not None:
            entry["default"] = field.default
        schema[field.alias or name] = entry
    return schema


OPTIONS_SCHEMA = options_schema()


class DateParsing(str, Enum):
    """What to do with a DATE-typed value that does not parse."""

    null = "null"
    error = "error"
    keep = "keep"


class PollingConfig(BaseModel):
    # No bound by default: a stuck execution is polled until it terminates.
    interval_seconds: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, ge=0)
    max_attempts: int | None = Field(default=None, ge=1)
    timeout_seconds: float | None = Field(default=None, gt=0)


class ResultsConfig(BaseModel):
    page_size: int | None = Field(default=None, ge=1, le=1000)
    invalid_dates: DateParsing = DateParsing.null


class ConnectorSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    options: ConnectorOptions = Field(default_factory=ConnectorOptions)
    region: str = DEFAULT_REGION
    workgroup: str | None = None
    probe_connection: bool = False
    polling: PollingConfig = Field(default_factory=PollingConfig)
    results: ResultsConfig = Field(default_factory=ResultsConfig)
