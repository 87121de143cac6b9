# -*- coding: utf-8 -*-
"""Date parsing and day arithmetic shared by the planning engine.

Every function here is total: unparsable input degrades to ``None`` or
``math.inf`` instead of raising.
"""
from __future__ import annotations

import math
import typing as t
from datetime import date, datetime, time, timedelta, tzinfo

DAY = timedelta(days=1)


def local_now() -> datetime:
    """Current wall-clock time as an aware datetime in the system zone."""
    return datetime.now().astimezone()


def ensure_aware(now: datetime) -> datetime:
    """Attach the system local zone to a naive ``now``."""
    if now.tzinfo is None:
        return now.astimezone()
    return now


def parse_date_or_null(value: t.Any, tz: t.Optional[tzinfo] = None) -> t.Optional[datetime]:
    """Parse ``value`` into an aware datetime, or return None.

    :param value: ISO string (``Z`` suffix, offsets and date-only forms
        accepted), ``datetime`` or ``date``.
    :param tz: Zone assumed for naive values. Defaults to the system zone.
    :return: An aware datetime, or None when ``value`` is empty or invalid.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz) if tz is not None else parsed.astimezone()
    return parsed


def days_until(value: t.Any, now: datetime) -> t.Union[int, float]:
    """Whole days from ``now`` until ``value``, rounded up.

    Returns ``math.inf`` when ``value`` is missing or unparsable so such
    dates never qualify as near-term.
    """
    now = ensure_aware(now)
    parsed = parse_date_or_null(value, now.tzinfo)
    if parsed is None:
        return math.inf
    return math.ceil((parsed - now) / DAY)


def local_day(moment: datetime, now: datetime) -> date:
    """Calendar day of ``moment`` as seen from ``now``'s zone."""
    return moment.astimezone(ensure_aware(now).tzinfo).date()


def start_of_day(now: datetime) -> datetime:
    now = ensure_aware(now)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Monday 00:00 of the week containing ``now``."""
    return start_of_day(now) - timedelta(days=ensure_aware(now).weekday())


def resolve_now(value: t.Optional[str] = None) -> datetime:
    """Reference time for a request: the parsed ``value`` or the system clock.

    :raises ValueError: If ``value`` is given but is not an ISO timestamp.
    """
    if value is None or not value.strip():
        return local_now()
    parsed = parse_date_or_null(value)
    if parsed is None:
        raise ValueError(f"Invalid 'now' timestamp: {value!r}")
    return parsed
