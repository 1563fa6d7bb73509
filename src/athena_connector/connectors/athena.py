"""Athena connector: submit, poll, paginate, map.

All remote calls go through a boto3 Athena client injected at construction.
The client is shared and holds no per-query state; everything a query needs
lives on the stack of the calling thread.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from athena_connector.config.settings import (
    ConnectorOptions,
    ConnectorSettings,
    PollingConfig,
    ResultsConfig,
)
from athena_connector.connectors.formatter import map_query_results
from athena_connector.connectors.interface import (
    QueryOutcome,
    QueryRunner,
    RawResultSet,
)
from athena_connector.errors import QueryExecutionFailedError, QueryTimeoutError

logger = logging.getLogger(__name__)

SUCCEEDED = "SUCCEEDED"
FAILED_STATES = frozenset({"FAILED", "CANCELLED"})


class AthenaConnector:
    """Runs SQL against Athena and returns host-typed results."""

    def __init__(
        self,
        client: Any,
        options: ConnectorOptions,
        *,
        polling: PollingConfig | None = None,
        results: ResultsConfig | None = None,
        workgroup: str | None = None,
        probe_connection: bool = False,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self.options = options
        self.polling = polling or PollingConfig()
        self.results = results or ResultsConfig()
        self.workgroup = workgroup
        self.probe_connection = probe_connection
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_settings(
        cls, client: Any, settings: ConnectorSettings, **kwargs: Any
    ) -> AthenaConnector:
        return cls(
            client,
            settings.options,
            polling=settings.polling,
            results=settings.results,
            workgroup=settings.workgroup,
            probe_connection=settings.probe_connection,
            **kwargs,
        )

    def _start_params(self, sql: str) -> dict[str, Any]:
        context: dict[str, str] = {"Catalog": self.options.catalog}
        if self.options.database:
            context["Database"] = self.options.database

        params: dict[str, Any] = {
            "QueryString": sql,
            "QueryExecutionContext": context,
        }
        output_location = self.options.output_location
        if output_location:
            params["ResultConfiguration"] = {"OutputLocation": output_location}
        if self.workgroup:
            params["WorkGroup"] = self.workgroup
        return params

    def start_query(self, sql: str) -> str:
        """Start an execution and return its id. Service errors propagate."""
        response = self._client.start_query_execution(**self._start_params(sql))
        execution_id: str = response["QueryExecutionId"]
        logger.debug("Started Athena execution %s", execution_id)
        return execution_id

    def wait_for_completion(self, execution_id: str) -> None:
        """Poll until the execution succeeds.

        Raises:
            QueryExecutionFailedError: The execution was FAILED or CANCELLED.
            QueryTimeoutError: A configured attempt or time bound was reached.
        """
        max_attempts = self.polling.max_attempts
        timeout = self.polling.timeout_seconds
        started = self._clock()
        attempts = 0

        while True:
            response = self._client.get_query_execution(QueryExecutionId=execution_id)
            status = response["QueryExecution"]["Status"]
            state = status["State"]
            attempts += 1

            if state == SUCCEEDED:
                logger.debug("Execution %s succeeded after %d checks", execution_id, attempts)
                return
            if state in FAILED_STATES:
                raise QueryExecutionFailedError(
                    execution_id, state, status.get("StateChangeReason")
                )

            elapsed = self._clock() - started
            if (max_attempts is not None and attempts >= max_attempts) or (
                timeout is not None and elapsed >= timeout
            ):
                raise QueryTimeoutError(execution_id, attempts=attempts, elapsed=elapsed)

            logger.debug("Execution %s is %s, checking again", execution_id, state)
            self._sleep(self.polling.interval_seconds)

    def fetch_results(self, execution_id: str) -> RawResultSet:
        """Read every result page of a finished execution."""
        params: dict[str, Any] = {"QueryExecutionId": execution_id}
        if self.results.page_size:
            params["MaxResults"] = self.results.page_size

        raw = RawResultSet()
        metadata_captured = False
        pages = 0

        while True:
            response = self._client.get_query_results(**params)
            result_set = response["ResultSet"]
            pages += 1

            # Column order is fixed by the first page.
            if not metadata_captured:
                raw.columns = list(result_set.get("ResultSetMetadata", {}).get("ColumnInfo", []))
                metadata_captured = True

            raw.rows.extend(result_set.get("Rows", []))

            next_token = response.get("NextToken")
            if not next_token:
                break
            params["NextToken"] = next_token

        logger.debug(
            "Fetched %d rows in %d pages for execution %s", len(raw.rows), pages, execution_id
        )
        return raw

    def run(self, query_text: str, query_path: str | None = None) -> QueryOutcome:
        """Query runner: never raises, reports failures in the outcome."""
        execution_id: str | None = None
        try:
            execution_id = self.start_query(query_text)
            self.wait_for_completion(execution_id)
            raw = self.fetch_results(execution_id)
            output = map_query_results(raw, invalid_dates=self.results.invalid_dates)
        except Exception as exc:
            logger.error(
                "Error executing query %s: %s", query_path or "<inline>", exc, exc_info=True
            )
            if execution_id is None:
                execution_id = getattr(exc, "execution_id", None)
            return QueryOutcome.failure(exc, execution_id=execution_id)

        logger.info(
            "Query %s returned %d rows", query_path or "<inline>", output.expected_row_count
        )
        return QueryOutcome.success(output, execution_id=execution_id)

    def get_runner(self) -> QueryRunner:
        return self.run

    def test_connection(self) -> bool:
        """Report whether the connection is usable.

        Without ``probe_connection`` this always succeeds and makes no remote
        call. With it, a one-row select against the test table must succeed.
        """
        if not self.probe_connection:
            return True

        table = self.options.test_table_name
        if not table:
            logger.error("Connection probe enabled but no test table name is configured")
            return False

        try:
            execution_id = self.start_query(f'SELECT * FROM "{table}" LIMIT 1')
            self.wait_for_completion(execution_id)
        except Exception as exc:
            logger.error("Error validating table connection: %s", exc, exc_info=True)
            return False
        return True
