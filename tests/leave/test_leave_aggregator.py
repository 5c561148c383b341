from __future__ import annotations

from datetime import date

import pytest

from src.payroll_system.payroll_system.core.enums import LeaveAttribution, LeaveCategory, LeaveStatus
from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.leave.aggregator import LeaveAggregator
from tests.fakes import FakeLeaveRepo, make_leave


def test_contained_unpaid_leave_is_bucketed():
    repo = FakeLeaveRepo([make_leave(1, leave_type=LeaveCategory.UNPAID, start=date(2025, 1, 6), end=date(2025, 1, 10))])
    summary = LeaveAggregator(repo).get_employee_leave_data("E1", 1, 2025)

    assert summary.approved_leave_days == 5
    assert summary.unpaid_leave_days == 5
    assert summary.sick_leave_days == 0
    assert summary.casual_leave_days == 0
    assert summary.available


def test_pending_and_other_employees_are_ignored():
    repo = FakeLeaveRepo(
        [
            make_leave(1, status=LeaveStatus.PENDING),
            make_leave(2, status=LeaveStatus.REJECTED),
            make_leave(3, employee_id="E2"),
        ]
    )
    summary = LeaveAggregator(repo).get_employee_leave_data("E1", 1, 2025)
    assert summary.approved_leave_days == 0


def test_earned_leave_only_counts_towards_approved_total():
    repo = FakeLeaveRepo(
        [
            make_leave(1, leave_type=LeaveCategory.EARNED, start=date(2025, 1, 2), end=date(2025, 1, 3)),
            make_leave(2, leave_type=LeaveCategory.SICK, start=date(2025, 1, 20), end=date(2025, 1, 20)),
        ]
    )
    summary = LeaveAggregator(repo).get_employee_leave_data("E1", 1, 2025)
    assert summary.approved_leave_days == 3
    assert summary.sick_leave_days == 1
    assert summary.casual_leave_days == 0


def test_full_span_counts_boundary_leave_in_both_months():
    repo = FakeLeaveRepo([make_leave(1, start=date(2025, 1, 30), end=date(2025, 2, 2))])
    agg = LeaveAggregator(repo)

    assert agg.get_employee_leave_data("E1", 1, 2025).casual_leave_days == 4
    assert agg.get_employee_leave_data("E1", 2, 2025).casual_leave_days == 4


def test_clipped_policy_splits_boundary_leave():
    repo = FakeLeaveRepo([make_leave(1, start=date(2025, 1, 30), end=date(2025, 2, 2))])
    agg = LeaveAggregator(repo, policy=LeaveAttribution.CLIPPED)

    assert agg.get_employee_leave_data("E1", 1, 2025).casual_leave_days == 2
    assert agg.get_employee_leave_data("E1", 2, 2025).casual_leave_days == 2


def test_store_failure_degrades_to_unavailable_summary(caplog):
    agg = LeaveAggregator(FakeLeaveRepo(fail=True))
    summary = agg.get_employee_leave_data_or_default("E1", 1, 2025)

    assert not summary.available
    assert summary.approved_leave_days == 0
    assert "Leave data unavailable" in caplog.text


def test_invalid_month_is_still_an_error():
    agg = LeaveAggregator(FakeLeaveRepo())
    with pytest.raises(ValidationError):
        agg.get_employee_leave_data_or_default("E1", 13, 2025)
