from __future__ import annotations

from datetime import date

from src.payroll_system.payroll_system.core.enums import LeaveCategory, LeaveStatus
from src.payroll_system.payroll_system.leave.balance import LeaveBalanceTracker, compute_leave_balance
from tests.fakes import FakeLeaveRepo, make_leave


def test_over_leave_gives_negative_remaining():
    balance = compute_leave_balance(
        [make_leave(1, start=date(2025, 3, 1), end=date(2025, 3, 25))],
        year=2025,
        entitlement=21,
    )
    assert balance.taken == 25
    assert balance.remaining == -4


def test_only_approved_leave_starting_in_year_counts():
    rows = [
        make_leave(1, start=date(2024, 12, 30), end=date(2025, 1, 2)),
        make_leave(2, start=date(2025, 2, 3), end=date(2025, 2, 4)),
        make_leave(3, start=date(2025, 5, 1), end=date(2025, 5, 9), status=LeaveStatus.PENDING),
    ]
    balance = compute_leave_balance(rows, year=2025)
    assert balance.taken == 2
    assert balance.remaining == 19


def test_category_balances_against_entitlements():
    tracker = LeaveBalanceTracker(
        FakeLeaveRepo(
            [
                make_leave(1, leave_type=LeaveCategory.SICK, start=date(2025, 1, 6), end=date(2025, 1, 8)),
                make_leave(2, leave_type=LeaveCategory.UNPAID, start=date(2025, 4, 1), end=date(2025, 4, 2)),
            ]
        ),
        entitlement=21,
        category_entitlements={LeaveCategory.SICK: 10, LeaveCategory.CASUAL: 12},
    )
    balance = tracker.get_employee_leave_balance("E1", 2025)

    assert balance.by_category[LeaveCategory.SICK].remaining == 7
    assert balance.by_category[LeaveCategory.CASUAL].remaining == 12
    assert balance.by_category[LeaveCategory.UNPAID].taken == 2
    assert balance.by_category[LeaveCategory.UNPAID].remaining is None
    assert balance.to_dict()["by_category"]["unpaid"] == {"entitlement": None, "taken": 2, "remaining": None}


def test_store_failure_degrades_to_unavailable_balance():
    tracker = LeaveBalanceTracker(FakeLeaveRepo(fail=True), entitlement=21)
    balance = tracker.get_employee_leave_balance_or_default("E1", 2025)

    assert not balance.available
    assert balance.remaining == 21
