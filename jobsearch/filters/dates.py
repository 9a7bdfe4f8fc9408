# jobsearch/filters/dates.py
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

# Canonical "date posted" options offered by the search form
_CANONICAL: dict[str, relativedelta | timedelta] = {
    "last 24 hours": timedelta(days=1),
    "24h": timedelta(days=1),
    "1d": timedelta(days=1),
    "1 day": timedelta(days=1),
    "last 7 days": timedelta(days=7),
    "7d": timedelta(days=7),
    "last 30 days": timedelta(days=30),
    "30d": timedelta(days=30),
    "last 2 months": relativedelta(months=2),
    "2m": relativedelta(months=2),
    "last two months": relativedelta(months=2),
}

_LAST_N_RE = re.compile(r"last\s+(\d+)\s+(day|days|month|months|hour|hours)", re.I)


def _offset_for(n: int, unit: str) -> relativedelta | timedelta:
    unit = unit.lower()
    if unit.startswith("hour"):
        return timedelta(hours=n)
    if unit.startswith("day"):
        return timedelta(days=n)
    # relativedelta clamps to the last day of the target month (no overflow)
    return relativedelta(months=n)


def resolve_date_window(label: Optional[str], now: datetime) -> Optional[datetime]:
    """
    Turn a "date posted" label into the inclusive lower bound for ``posted_at``.
    Accepts the canonical options ("7d", "last 30 days", ...) and any
    "last N hours/days/months" phrase. "any", blank and unknown text give None.
    """
    if label is None:
        return None
    key = label.strip().lower()
    if not key or key == "any":
        return None

    offset = _CANONICAL.get(key)
    if offset is None:
        m = _LAST_N_RE.search(label)
        if not m:
            return None
        offset = _offset_for(int(m.group(1)), m.group(2))
    return now - offset


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive values (request clocks, SQLite columns) are already UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
