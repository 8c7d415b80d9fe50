from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from ..core.constants import DATE_FORMAT
from ..core.enums import PeriodView
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def period_bounds(view: PeriodView, day: date) -> tuple[date, date]:
    if view == PeriodView.DAY:
        return day, day
    if view == PeriodView.WEEK:
        return week_bounds(day)
    if view == PeriodView.MONTH:
        return month_bounds(day)
    raise ValidationError(f"Unsupported view: {view}")


def leave_days(start: date, end: date) -> list[date]:
    """Every calendar day in [start, end]; empty when end < start."""
    day_count = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(max(day_count, 0))]
