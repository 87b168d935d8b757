"""Timestamp helpers shared by the engine and its collaborators.

All timestamps inside the engine are timezone-aware UTC datetimes. Wire
formats carry either ISO-8601 strings or Unix epoch numbers.
"""
from __future__ import annotations

import datetime
import math


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def ensure_utc(value: datetime.datetime) -> datetime.datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def from_unix_ms(value: float) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(value / 1000, tz=datetime.timezone.utc)


def from_unix_seconds(value: float) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)


def to_unix_seconds(value: datetime.datetime) -> int:
    """Floor *value* to whole Unix seconds."""
    return math.floor(ensure_utc(value).timestamp())


def coerce_datetime(value: object) -> datetime.datetime:
    """Convert a datetime, ISO-8601 string, or Unix milliseconds to UTC.

    Raises
    ------
    ValueError
        If *value* cannot be interpreted as a timestamp.
    """
    if isinstance(value, datetime.datetime):
        return ensure_utc(value)
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp {value!r}")
    if isinstance(value, (int, float)):
        return _from_epoch_ms(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.datetime.fromisoformat(text))
        except (ValueError, OverflowError):
            pass
        try:
            return _from_epoch_ms(float(text))
        except ValueError:
            pass
    raise ValueError(f"Invalid timestamp {value!r}")


def _from_epoch_ms(value: float) -> datetime.datetime:
    try:
        return from_unix_ms(value)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"Timestamp out of range: {value!r}") from exc
