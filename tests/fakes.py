"""In-memory repositories shared by the test modules."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

from src.payroll_system.payroll_system.core.enums import LeaveCategory, LeaveStatus
from src.payroll_system.payroll_system.employees.model import EmployeeProfile
from src.payroll_system.payroll_system.leave.model import LeaveRequest


def make_leave(
    request_id=1,
    *,
    employee_id="E1",
    leave_type=LeaveCategory.CASUAL,
    start=date(2025, 1, 10),
    end=date(2025, 1, 12),
    total_days=None,
    status=LeaveStatus.APPROVED,
):
    return LeaveRequest(
        request_id=request_id,
        employee_id=employee_id,
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        total_days=total_days if total_days is not None else (end - start).days + 1,
        reason=None,
        status=status,
        created_at=datetime(2025, 1, 1, 9, 0),
    )


class FakeLeaveRepo:
    def __init__(self, requests=(), *, fail=False):
        self._rows = {r.request_id: r for r in requests}
        self._next_id = max(self._rows, default=0) + 1
        self.fail = fail

    def _check(self):
        if self.fail:
            raise RuntimeError("leave store offline")

    def list_approved_overlapping(self, *, employee_id, start_date, end_date):
        self._check()
        return [
            r
            for r in self._rows.values()
            if r.employee_id == employee_id and r.status == LeaveStatus.APPROVED and r.overlaps(start_date, end_date)
        ]

    def list_approved_for_year(self, *, employee_id, year):
        self._check()
        return [
            r
            for r in self._rows.values()
            if r.employee_id == employee_id and r.status == LeaveStatus.APPROVED and r.start_date.year == year
        ]

    def create(self, *, employee_id, leave_type, start_date, end_date, total_days, reason):
        rid = self._next_id
        self._next_id += 1
        self._rows[rid] = LeaveRequest(
            request_id=rid,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=datetime(2025, 1, 1, 9, 0),
        )
        return rid

    def get_by_id(self, *, request_id):
        return self._rows.get(int(request_id))

    def list_for_employee(self, *, employee_id, status=None, limit=200):
        rows = [r for r in self._rows.values() if r.employee_id == employee_id and (status is None or r.status == status)]
        return rows[:limit]

    def decide(self, *, request_id, status, approved_by, comments=None):
        req = self._rows.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self._rows[int(request_id)] = replace(
            req,
            status=status,
            approved_by=approved_by,
            approved_at=datetime(2025, 1, 2, 10, 0),
            comments=comments,
        )
        return True

    def delete(self, *, request_id):
        return self._rows.pop(int(request_id), None) is not None


class FakePayrollRepo:
    def __init__(self):
        self._rows = {}
        self._next_id = 1
        self.status_updates = []

    def get_by_id(self, payroll_id):
        return self._rows.get(int(payroll_id))

    def get_for_period(self, *, employee_id, month, year):
        for r in self._rows.values():
            if (r.employee_id, r.month, r.year) == (employee_id, month, year):
                return r
        return None

    def list_for_period(self, *, month, year):
        return [r for r in self._rows.values() if (r.month, r.year) == (month, year)]

    def create(self, record):
        pid = self._next_id
        self._next_id += 1
        self._rows[pid] = replace(record, payroll_id=pid)
        return pid

    def update(self, record):
        if record.payroll_id not in self._rows:
            return False
        self._rows[record.payroll_id] = record
        return True

    def update_status(self, *, payroll_id, status, payment_date=None, payment_method=None):
        rec = self._rows.get(int(payroll_id))
        if not rec:
            return False
        self.status_updates.append((payroll_id, status))
        self._rows[int(payroll_id)] = replace(
            rec,
            payment_status=status,
            payment_date=payment_date or rec.payment_date,
            payment_method=payment_method or rec.payment_method,
        )
        return True


class FakeEmployeeRepo:
    def __init__(self, employees=()):
        self._rows = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id):
        return self._rows.get(str(employee_id))


def make_employee(employee_id="E1", **overrides):
    data = dict(
        employee_id=employee_id,
        employee_number="EMP-001",
        first_name="Tendai",
        last_name="Moyo",
        position="Accountant",
        department="Finance",
        city="Harare",
        bank_name="CBZ",
        anchor_account_number="USD-123",
        local_account_number=None,
        branch_code=None,
        national_id="63-123456-A-42",
        employment_status="active",
        employment_type="permanent",
    )
    data.update(overrides)
    return EmployeeProfile(**data)
