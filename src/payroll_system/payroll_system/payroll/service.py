from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import days_in_month, month_bounds
from ..common.money import Money, to_decimal
from ..common.validators import optional_text
from ..core.constants import MAX_DAYS_WORKED
from ..core.enums import AttendanceBasis, PaymentStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..core.settings import PayrollSettings
from ..leave.aggregator import LeaveAggregator
from ..leave.balance import LeaveBalanceTracker
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import (
    AttendanceCounts,
    AttendanceSuggestion,
    BulkPayrollResult,
    PayrollBreakdown,
    PayrollPeriodSummary,
    PayrollRecord,
    SalaryComponents,
)
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PROCESSED, PaymentStatus.PAID},
    PaymentStatus.PROCESSED: {PaymentStatus.PAID},
    PaymentStatus.PAID: set(),
}


@dataclass(frozen=True)
class NewPayroll:
    employee_id: str
    month: int
    year: int
    components: SalaryComponents
    attendance: Optional[AttendanceCounts] = None
    exchange_rate: Decimal = Decimal("0")
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class PayrollService:
    """Use case: compute, create and settle payroll records."""

    def __init__(
        self,
        payrolls: PayrollRepository,
        aggregator: LeaveAggregator,
        balances: LeaveBalanceTracker,
        *,
        settings: Optional[PayrollSettings] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payrolls = payrolls
        self._aggregator = aggregator
        self._balances = balances
        self._settings = settings or PayrollSettings()
        self._calculator = calculator or StandardPayrollCalculator()

    def calculate(self, components: SalaryComponents) -> PayrollBreakdown:
        return self._calculator.calculate(components)

    def suggest_attendance(self, *, employee_id: str, month: int, year: int) -> AttendanceSuggestion:
        """Propose days worked/absent for a period from approved unpaid leave.

        Without leave data the configured default working days are assumed.
        """
        summary = self._aggregator.get_employee_leave_data_or_default(employee_id, month, year)
        balance = self._balances.get_employee_leave_balance_or_default(employee_id, year)

        if not summary.available:
            attendance = AttendanceCounts(days_worked=self._settings.default_working_days, days_absent=0)
        else:
            if self._settings.attendance_basis == AttendanceBasis.WORKING:
                basis = self._settings.default_working_days
            else:
                basis = days_in_month(month, year)
            # Full-span attribution can count more unpaid days than the period holds
            absent = min(summary.unpaid_leave_days, basis)
            attendance = AttendanceCounts(days_worked=basis - absent, days_absent=absent)

        return AttendanceSuggestion(
            attendance=attendance,
            leave_summary=summary,
            leave_balance=balance,
            from_leave_data=summary.available,
        )

    @staticmethod
    def _component_errors(breakdown: PayrollBreakdown, *, allow_negative_net: bool) -> list[str]:
        """Rules on the salary figures alone, shared by create and update."""
        errors: list[str] = []
        if breakdown.components.basic_salary.amount <= 0:
            errors.append("Basic salary must be greater than 0")
        if breakdown.net_salary.is_negative and not allow_negative_net:
            errors.append("Net salary cannot be negative. Please check deductions.")
        return errors

    def _validate(
        self,
        new: NewPayroll,
        breakdown: PayrollBreakdown,
        attendance: Optional[AttendanceCounts],
        *,
        allow_negative_net: bool,
    ) -> list[str]:
        errors: list[str] = []
        if not (new.employee_id or "").strip():
            errors.append("Employee is required")
        if not 1 <= int(new.month) <= 12:
            errors.append("Month must be between 1 and 12")
        if attendance is not None:
            if not 0 <= attendance.days_worked <= MAX_DAYS_WORKED:
                errors.append(f"Days worked must be between 0 and {MAX_DAYS_WORKED}")
            if attendance.days_absent < 0:
                errors.append("Days absent cannot be negative")
        if to_decimal(new.exchange_rate, "Exchange rate") < 0:
            errors.append("Exchange rate cannot be negative")
        return errors + self._component_errors(breakdown, allow_negative_net=allow_negative_net)

    def _resolve_attendance(self, new: NewPayroll) -> Optional[AttendanceCounts]:
        if new.attendance is not None or not 1 <= int(new.month) <= 12:
            return new.attendance
        return self.suggest_attendance(employee_id=new.employee_id, month=new.month, year=new.year).attendance

    def build_record(self, new: NewPayroll, *, allow_negative_net: bool = False) -> PayrollRecord:
        breakdown = self._calculator.calculate(new.components)
        attendance = self._resolve_attendance(new)
        errors = self._validate(new, breakdown, attendance, allow_negative_net=allow_negative_net)
        if errors:
            raise ValidationError("; ".join(errors), errors=errors)

        return PayrollRecord(
            payroll_id=None,
            employee_id=new.employee_id.strip(),
            month=int(new.month),
            year=int(new.year),
            breakdown=breakdown,
            attendance=attendance,
            exchange_rate=to_decimal(new.exchange_rate, "Exchange rate"),
            payment_status=new.payment_status,
            payment_date=new.payment_date,
            payment_method=optional_text(new.payment_method),
            notes=optional_text(new.notes),
        )

    def create_record(self, new: NewPayroll, *, allow_negative_net: bool = False) -> PayrollRecord:
        record = self.build_record(new, allow_negative_net=allow_negative_net)

        existing = self._payrolls.get_for_period(employee_id=record.employee_id, month=record.month, year=record.year)
        if existing:
            raise ValidationError("A payroll record already exists for this employee and period")

        payroll_id = self._payrolls.create(record)
        logger.info(
            "Payroll %s created for employee=%s period=%02d/%d net=%s",
            payroll_id,
            record.employee_id,
            record.month,
            record.year,
            record.net_salary,
        )
        return replace(record, payroll_id=payroll_id)

    def get(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get_by_id(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll record not found")
        return record

    def update_components(
        self,
        payroll_id: int,
        components: SalaryComponents,
        *,
        allow_negative_net: bool = False,
    ) -> PayrollRecord:
        record = self.get(payroll_id)
        if record.payment_status == PaymentStatus.PAID:
            raise ValidationError("A paid payroll record cannot be changed")

        breakdown = self._calculator.calculate(components)
        errors = self._component_errors(breakdown, allow_negative_net=allow_negative_net)
        if errors:
            raise ValidationError("; ".join(errors), errors=errors)

        updated = replace(record, breakdown=breakdown)
        if not self._payrolls.update(updated):
            raise ValidationError("Updating the payroll record failed")
        return updated

    def _transition(
        self,
        payroll_id: int,
        target: PaymentStatus,
        *,
        payment_date: Optional[date] = None,
        payment_method: Optional[str] = None,
    ) -> PayrollRecord:
        record = self.get(payroll_id)
        if target not in _TRANSITIONS[record.payment_status]:
            raise ValidationError(f"Cannot move payroll from {record.payment_status.value} to {target.value}")

        ok = self._payrolls.update_status(
            payroll_id=int(payroll_id),
            status=target,
            payment_date=payment_date,
            payment_method=optional_text(payment_method),
        )
        if not ok:
            raise ValidationError("Updating the payment status failed")
        logger.info("Payroll %s %s -> %s", payroll_id, record.payment_status.value, target.value)
        return replace(
            record,
            payment_status=target,
            payment_date=payment_date or record.payment_date,
            payment_method=optional_text(payment_method) or record.payment_method,
        )

    def mark_processed(self, payroll_id: int) -> PayrollRecord:
        return self._transition(payroll_id, PaymentStatus.PROCESSED)

    def mark_paid(self, payroll_id: int, *, payment_date: Optional[date] = None, payment_method: Optional[str] = None) -> PayrollRecord:
        return self._transition(
            payroll_id,
            PaymentStatus.PAID,
            payment_date=payment_date or date.today(),
            payment_method=payment_method,
        )

    def calculate_bulk(self, entries: Iterable[NewPayroll], *, allow_negative_net: bool = False) -> BulkPayrollResult:
        """Calculate many employees; one bad entry does not abort the batch."""
        result = BulkPayrollResult()
        for new in entries:
            try:
                breakdown = self._calculator.calculate(new.components)
                errors = self._validate(new, breakdown, new.attendance, allow_negative_net=allow_negative_net)
            except DomainError as e:
                result.errors[new.employee_id] = list(getattr(e, "errors", None) or [str(e)])
                continue
            if errors:
                result.errors[new.employee_id] = errors
            else:
                result.breakdowns[new.employee_id] = breakdown

        if result.errors:
            logger.warning("Bulk payroll: %d of %d calculations failed", result.failed, result.failed + result.succeeded)
        return result

    def list_for_period(self, *, month: int, year: int) -> Sequence[PayrollRecord]:
        month_bounds(month, year)
        return self._payrolls.list_for_period(month=int(month), year=int(year))

    def summarize_period(self, *, month: int, year: int) -> PayrollPeriodSummary:
        """Gross, net and deduction totals plus payment status counts for one month."""
        records = self.list_for_period(month=month, year=year)
        zero = Money.zero(self._settings.anchor_currency)

        total_gross, total_net, total_deductions = zero, zero, zero
        status_counts = {s: 0 for s in PaymentStatus}
        for r in records:
            total_gross = total_gross + r.gross_salary
            total_net = total_net + r.net_salary
            total_deductions = total_deductions + r.breakdown.total_deductions
            status_counts[r.payment_status] += 1

        average_net = Money(total_net.amount / len(records), total_net.currency) if records else zero
        return PayrollPeriodSummary(
            month=int(month),
            year=int(year),
            record_count=len(records),
            total_gross=total_gross,
            total_net=total_net,
            total_deductions=total_deductions,
            average_net=average_net,
            status_counts=status_counts,
        )
