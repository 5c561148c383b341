from __future__ import annotations

from datetime import date

import pytest

from src.payroll_system.payroll_system.core.enums import LeaveCategory, LeaveStatus, Role
from src.payroll_system.payroll_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.payroll_system.payroll_system.leave.model import LeaveRequestDraft
from src.payroll_system.payroll_system.leave.service import LeaveRequestService
from tests.fakes import FakeLeaveRepo


def _submit(svc, **overrides):
    data = dict(employee_id="E1", leave_type="unpaid", start_date="2025-01-06", end_date="2025-01-10", reason="Family")
    data.update(overrides)
    return svc.submit(LeaveRequestDraft(**data))


def test_submit_stores_pending_request_with_computed_days():
    repo = FakeLeaveRepo()
    svc = LeaveRequestService(repo)

    rid = _submit(svc)
    req = repo.get_by_id(request_id=rid)

    assert req.status == LeaveStatus.PENDING
    assert req.leave_type == LeaveCategory.UNPAID
    assert req.total_days == 5
    assert req.start_date == date(2025, 1, 6)


def test_submit_rejects_invalid_draft_with_all_messages():
    svc = LeaveRequestService(FakeLeaveRepo())
    with pytest.raises(ValidationError) as exc:
        _submit(svc, employee_id="", start_date="2025-01-10", end_date="2025-01-06")
    assert exc.value.errors == ["Employee is required", "End date cannot be before start date"]


def test_hr_can_approve_once():
    repo = FakeLeaveRepo()
    svc = LeaveRequestService(repo)
    rid = _submit(svc)

    svc.approve(current_role=Role.HR, approver_id="H1", request_id=rid, comments="ok")
    req = repo.get_by_id(request_id=rid)
    assert req.status == LeaveStatus.APPROVED
    assert req.approved_by == "H1"
    assert req.approved_at is not None

    with pytest.raises(ValidationError):
        svc.reject(current_role=Role.ADMIN, approver_id="A1", request_id=rid)


def test_employee_cannot_approve():
    svc = LeaveRequestService(FakeLeaveRepo())
    rid = _submit(svc)
    with pytest.raises(AuthorizationError):
        svc.approve(current_role=Role.EMPLOYEE, approver_id="E1", request_id=rid)


def test_deciding_missing_request_is_not_found():
    svc = LeaveRequestService(FakeLeaveRepo())
    with pytest.raises(NotFoundError):
        svc.reject(current_role=Role.MANAGER, approver_id="M1", request_id=99)


def test_only_admin_deletes_resolved_requests():
    repo = FakeLeaveRepo()
    svc = LeaveRequestService(repo)
    rid = _submit(svc)
    svc.reject(current_role=Role.MANAGER, approver_id="M1", request_id=rid)

    with pytest.raises(AuthorizationError):
        svc.delete(current_role=Role.MANAGER, request_id=rid)

    svc.delete(current_role=Role.ADMIN, request_id=rid)
    assert repo.get_by_id(request_id=rid) is None


def test_pending_request_can_be_deleted():
    repo = FakeLeaveRepo()
    svc = LeaveRequestService(repo)
    rid = _submit(svc)
    svc.delete(current_role=Role.MANAGER, request_id=rid)
    assert svc.list_for_employee(employee_id="E1") == []
