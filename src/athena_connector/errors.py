"""Exception types raised by the connector."""

from __future__ import annotations


class ConnectorError(Exception):
    """Base class for connector errors."""


class MissingProfileError(ConnectorError):
    """The credential profile environment variable is not set.

    Nothing can run without credentials, so this is raised before any client
    or session is built.
    """

    def __init__(self, variable: str) -> None:
        super().__init__(f"Environment variable {variable} is not set.")
        self.variable = variable


class QueryExecutionFailedError(ConnectorError):
    """An Athena execution reached the FAILED or CANCELLED state."""

    def __init__(self, execution_id: str, state: str, reason: str | None = None) -> None:
        message = f"Query execution failed or was cancelled: {execution_id} ({state})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.execution_id = execution_id
        self.state = state
        self.reason = reason


class QueryTimeoutError(ConnectorError):
    """Polling gave up before the execution reached a terminal state.

    Only raised when a poll bound is configured.
    """

    def __init__(self, execution_id: str, *, attempts: int, elapsed: float) -> None:
        super().__init__(
            f"Query execution {execution_id} still pending after "
            f"{attempts} status checks ({elapsed:.1f}s)"
        )
        self.execution_id = execution_id
        self.attempts = attempts
        self.elapsed = elapsed


class InvalidDateValueError(ConnectorError):
    """A DATE-typed column held a value that is not a date."""

    def __init__(self, column: str, value: str) -> None:
        super().__init__(f"Column {column!r} holds an invalid date value: {value!r}")
        self.column = column
        self.value = value
