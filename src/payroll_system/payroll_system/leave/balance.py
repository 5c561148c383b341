from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from ..core.constants import DEFAULT_ANNUAL_LEAVE_ENTITLEMENT
from ..core.enums import LeaveCategory, LeaveStatus
from .model import CategoryBalance, LeaveBalance, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def compute_leave_balance(
    requests: Iterable[LeaveRequest],
    *,
    year: int,
    entitlement: int = DEFAULT_ANNUAL_LEAVE_ENTITLEMENT,
    category_entitlements: Optional[Mapping[LeaveCategory, int]] = None,
) -> LeaveBalance:
    """Approved leave starting in ``year`` against the entitlement; never floored at zero."""
    category_entitlements = category_entitlements or {}
    taken_by_category = {c: 0 for c in LeaveCategory}
    taken = 0

    for r in requests:
        if r.status != LeaveStatus.APPROVED or r.start_date.year != int(year):
            continue
        taken += int(r.total_days)
        taken_by_category[r.leave_type] += int(r.total_days)

    by_category = {
        c: CategoryBalance(category=c, entitlement=category_entitlements.get(c), taken=taken_by_category[c])
        for c in LeaveCategory
    }
    return LeaveBalance(year=int(year), entitlement=int(entitlement), taken=taken, by_category=by_category)


class LeaveBalanceTracker:
    def __init__(
        self,
        leaves: LeaveRepository,
        *,
        entitlement: int = DEFAULT_ANNUAL_LEAVE_ENTITLEMENT,
        category_entitlements: Optional[Mapping[LeaveCategory, int]] = None,
    ):
        self._leaves = leaves
        self._entitlement = int(entitlement)
        self._category_entitlements = dict(category_entitlements or {})

    def get_employee_leave_balance(self, employee_id: str, year: int) -> LeaveBalance:
        rows = self._leaves.list_approved_for_year(employee_id=str(employee_id), year=int(year))
        return compute_leave_balance(
            rows,
            year=year,
            entitlement=self._entitlement,
            category_entitlements=self._category_entitlements,
        )

    def get_employee_leave_balance_or_default(self, employee_id: str, year: int) -> LeaveBalance:
        try:
            return self.get_employee_leave_balance(employee_id, year)
        except Exception:
            logger.warning("Leave balance unavailable for employee=%s year=%d", employee_id, int(year), exc_info=True)
            return LeaveBalance.unavailable(year=int(year), entitlement=self._entitlement)
