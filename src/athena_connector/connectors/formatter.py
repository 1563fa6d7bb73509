"""Turn raw Athena result pages into host rows."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

from athena_connector.config.settings import DateParsing
from athena_connector.connectors.interface import (
    EvidenceType,
    MappedOutput,
    RawResultSet,
)
from athena_connector.connectors.types import map_athena_type_to_evidence_type
from athena_connector.errors import InvalidDateValueError

logger = logging.getLogger(__name__)


def parse_athena_datetime(value: str) -> datetime:
    """Parse an Athena date or timestamp rendering.

    Handles ``2024-01-15``, ``2024-01-15 10:30:00.123`` and zoned timestamps
    such as ``2024-01-15 10:30:00.123 UTC``.

    Raises:
        ValueError: If the value is not a date.
    """
    text = value.strip()
    tz = None
    head, sep, zone = text.rpartition(" ")
    if sep and zone[:1].isalpha():
        try:
            tz = timezone.utc if zone == "UTC" else ZoneInfo(zone)
        except (KeyError, OSError, ValueError) as exc:
            raise ValueError(f"unknown time zone {zone!r}") from exc
        text = head

    parsed = datetime.fromisoformat(text)
    if tz is not None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _reify_date(column: str, value: Any, policy: DateParsing) -> Any:
    if value is None:
        return None
    try:
        return parse_athena_datetime(value)
    except ValueError:
        if policy is DateParsing.error:
            raise InvalidDateValueError(column, value) from None
        logger.warning("Column %s holds an invalid date value: %r", column, value)
        return value if policy is DateParsing.keep else None


def map_query_results(
    raw: RawResultSet, *, invalid_dates: DateParsing = DateParsing.null
) -> MappedOutput:
    """Map raw result pages to rows keyed by column name.

    The first row is Athena's header row and is dropped. Values are taken as
    the raw strings Athena returns, except DATE-typed columns which become
    ``datetime`` values.
    """
    columns = raw.columns
    names = [column["Name"] for column in columns]

    rows: list[dict[str, Any]] = []
    for row in raw.rows[1:]:
        cells = row.get("Data", [])
        rows.append(
            {name: cell.get("VarCharValue") for name, cell in zip(names, cells, strict=False)}
        )

    column_types = [map_athena_type_to_evidence_type(column) for column in columns]

    date_columns = [c.name for c in column_types if c.evidence_type is EvidenceType.DATE]
    for mapped_row in rows:
        for name in date_columns:
            if name in mapped_row:
                mapped_row[name] = _reify_date(name, mapped_row[name], invalid_dates)

    return MappedOutput(rows=rows, column_types=column_types, expected_row_count=len(rows))
