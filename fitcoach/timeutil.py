# -*- coding: utf-8 -*-
"""UTC time helpers shared by the timer tools and the activity engines."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_now() -> str:
    return to_iso(utc_now())


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO8601 date or timestamp into an aware UTC datetime.

    Naive values are read as UTC. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def date_key(value: Any) -> Optional[str]:
    """Calendar-day bucket (UTC, YYYY-MM-DD) of a timestamp."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.date().isoformat()


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.astimezone(timezone.utc).date(), time.min, tzinfo=timezone.utc)


def start_of_month(value: datetime) -> datetime:
    day = value.astimezone(timezone.utc).date()
    return datetime.combine(date(day.year, day.month, 1), time.min, tzinfo=timezone.utc)
