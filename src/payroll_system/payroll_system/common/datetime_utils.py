from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Union

from ..core.exceptions import ValidationError

DateLike = Union[str, date]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def as_date(value: DateLike, field_name: str = "Date") -> date:
    """Accept a date or an ISO string; anything unparseable is a ValidationError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{field_name} is not a valid date: {value!r}") from exc


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """First and last calendar day of (month, year)."""
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def days_in_month(month: int, year: int) -> int:
    start, end = month_bounds(month, year)
    return (end - start).days + 1


def period_label(month: int, year: int) -> str:
    return f"{calendar.month_name[int(month)]} {int(year)}"


def now_local() -> datetime:
    """Current local time; the default period for leave lookups."""
    return datetime.now()
