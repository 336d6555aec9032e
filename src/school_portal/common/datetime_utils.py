from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterator

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive.

    Plain date arithmetic, so DST and UTC offsets never skip or repeat a day.
    """
    if end < start:
        return
    current = start
    while True:
        yield current
        if current == end:
            return
        current += timedelta(days=1)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
