from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from ..common.datetime_utils import month_bounds
from ..core.enums import LeaveAttribution, LeaveCategory, LeaveStatus
from .calculator import clipped_leave_days
from .model import LeaveRequest, LeaveSummary
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_CATEGORY_FIELDS = {
    LeaveCategory.UNPAID: "unpaid_leave_days",
    LeaveCategory.SICK: "sick_leave_days",
    LeaveCategory.CASUAL: "casual_leave_days",
}


def summarize_leave(
    requests: Iterable[LeaveRequest],
    *,
    period_start: date,
    period_end: date,
    policy: LeaveAttribution = LeaveAttribution.FULL_SPAN,
) -> LeaveSummary:
    """Bucket approved requests overlapping the period by category.

    Under FULL_SPAN a request touching the period counts with its whole
    ``total_days``, so leave crossing a month boundary is counted in both months.
    """
    totals = {"approved_leave_days": 0, "unpaid_leave_days": 0, "sick_leave_days": 0, "casual_leave_days": 0}

    for r in requests:
        if r.status != LeaveStatus.APPROVED or not r.overlaps(period_start, period_end):
            continue

        if policy == LeaveAttribution.CLIPPED:
            days = clipped_leave_days(r.start_date, r.end_date, period_start, period_end)
        else:
            days = int(r.total_days)

        totals["approved_leave_days"] += days
        bucket = _CATEGORY_FIELDS.get(r.leave_type)
        if bucket:
            totals[bucket] += days

    return LeaveSummary(**totals)


class LeaveAggregator:
    """Per-period leave summary for payroll and payslips."""

    def __init__(self, leaves: LeaveRepository, *, policy: LeaveAttribution = LeaveAttribution.FULL_SPAN):
        self._leaves = leaves
        self._policy = policy

    @property
    def policy(self) -> LeaveAttribution:
        return self._policy

    def get_employee_leave_data(self, employee_id: str, month: int, year: int) -> LeaveSummary:
        period_start, period_end = month_bounds(month, year)
        rows = self._leaves.list_approved_overlapping(
            employee_id=str(employee_id),
            start_date=period_start,
            end_date=period_end,
        )
        return summarize_leave(rows, period_start=period_start, period_end=period_end, policy=self._policy)

    def get_employee_leave_data_or_default(self, employee_id: str, month: int, year: int) -> LeaveSummary:
        """Best-effort variant: a failing leave store yields a placeholder summary."""
        month_bounds(month, year)
        try:
            return self.get_employee_leave_data(employee_id, month, year)
        except Exception:
            logger.warning(
                "Leave data unavailable for employee=%s period=%02d/%d",
                employee_id,
                int(month),
                int(year),
                exc_info=True,
            )
            return LeaveSummary.unavailable()
