"""Timestamp type shared by all persisted models.

Every instant on disk is UTC with millisecond precision and a ``Z`` suffix,
e.g. ``2024-01-01T00:00:00.000Z``.  Fixed width keeps lexicographic and
chronological order identical.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer


def _as_utc(value: datetime) -> datetime:
    # Naive values written by other tools are taken to be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Render *value* in canonical millisecond ISO-8601 UTC form."""
    value = _as_utc(value)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def utcnow() -> datetime:
    return datetime.now(UTC)


def now_timestamp() -> str:
    """Current instant as a canonical timestamp string."""
    return format_timestamp(utcnow())


Timestamp = Annotated[datetime, AfterValidator(_as_utc), PlainSerializer(format_timestamp, return_type=str)]
"""UTC ``datetime`` that serializes as ``YYYY-MM-DDTHH:MM:SS.sssZ``."""
