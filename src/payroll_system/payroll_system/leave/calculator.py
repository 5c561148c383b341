from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import DateLike, as_date, parse_iso_date
from ..core.enums import LeaveCategory
from .model import LeaveRequestDraft, ValidationResult


def calculate_leave_days(start: DateLike, end: DateLike) -> int:
    """Inclusive day count of a leave range.

    Ordering is the caller's concern; a reversed range is not corrected here.
    Unparseable input raises ValidationError.
    """
    start_d = as_date(start, "Start date")
    end_d = as_date(end, "End date")
    return (end_d - start_d).days + 1


def clipped_leave_days(start: date, end: date, period_start: date, period_end: date) -> int:
    """Days of [start, end] falling inside [period_start, period_end]."""
    lo = max(start, period_start)
    hi = min(end, period_end)
    if lo > hi:
        return 0
    return (hi - lo).days + 1


def _try_parse(value: str) -> Optional[date]:
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return None


def validate_leave_request(request: LeaveRequestDraft) -> ValidationResult:
    """Check a submission, collecting every failure instead of stopping at the first."""
    errors: list[str] = []

    if not (request.employee_id or "").strip():
        errors.append("Employee is required")

    leave_type = (request.leave_type or "").strip()
    if not leave_type:
        errors.append("Leave type is required")
    elif leave_type not in {c.value for c in LeaveCategory}:
        errors.append(f"Leave type must be one of: {', '.join(c.value for c in LeaveCategory)}")

    start: Optional[date] = None
    if not (request.start_date or "").strip():
        errors.append("Start date is required")
    else:
        start = _try_parse(request.start_date)
        if start is None:
            errors.append("Start date is not a valid date")

    if not (request.end_date or "").strip():
        errors.append("End date is required")
    else:
        end = _try_parse(request.end_date)
        if end is None:
            errors.append("End date is not a valid date")
        elif start is not None and end < start:
            errors.append("End date cannot be before start date")

    return ValidationResult(valid=not errors, errors=errors)
