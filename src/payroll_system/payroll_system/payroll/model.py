from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional

from ..common.money import Money, format_amount, to_decimal
from ..core.constants import DEFAULT_ANCHOR_CURRENCY
from ..core.enums import PaymentStatus
from ..leave.model import LeaveBalance, LeaveSummary


@dataclass(frozen=True)
class SalaryComponents:
    """Anchor-currency inputs of one payroll computation."""

    basic_salary: Money
    transport_allowance: Money
    other_allowances: Money
    overtime_pay: Money
    national_insurance: Money
    income_tax: Money
    other_deductions: Money

    @classmethod
    def of(
        cls,
        *,
        currency: str = DEFAULT_ANCHOR_CURRENCY,
        basic_salary=None,
        transport_allowance=None,
        other_allowances=None,
        overtime_pay=None,
        national_insurance=None,
        income_tax=None,
        other_deductions=None,
    ) -> "SalaryComponents":
        """Build from plain numbers; anything omitted is 0."""

        def m(value, name: str) -> Money:
            return Money(to_decimal(value, name), currency)

        return cls(
            basic_salary=m(basic_salary, "Basic salary"),
            transport_allowance=m(transport_allowance, "Transport allowance"),
            other_allowances=m(other_allowances, "Other allowances"),
            overtime_pay=m(overtime_pay, "Overtime pay"),
            national_insurance=m(national_insurance, "National insurance"),
            income_tax=m(income_tax, "Income tax"),
            other_deductions=m(other_deductions, "Other deductions"),
        )

    @classmethod
    def from_mapping(cls, data: Mapping, *, currency: str = DEFAULT_ANCHOR_CURRENCY) -> "SalaryComponents":
        return cls.of(
            currency=currency,
            basic_salary=data.get("basic_salary"),
            transport_allowance=data.get("transport_allowance"),
            other_allowances=data.get("other_allowances"),
            overtime_pay=data.get("overtime_pay"),
            national_insurance=data.get("national_insurance"),
            income_tax=data.get("income_tax"),
            other_deductions=data.get("other_deductions"),
        )

    @property
    def currency(self) -> str:
        return self.basic_salary.currency


@dataclass(frozen=True)
class PayrollBreakdown:
    components: SalaryComponents
    total_allowances: Money
    total_deductions: Money
    gross_salary: Money
    net_salary: Money
    warnings: tuple[str, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> dict:
        c = self.components
        return {
            "currency": c.currency,
            "basic_salary": c.basic_salary.format(),
            "transport_allowance": c.transport_allowance.format(),
            "other_allowances": c.other_allowances.format(),
            "overtime_pay": c.overtime_pay.format(),
            "national_insurance": c.national_insurance.format(),
            "income_tax": c.income_tax.format(),
            "other_deductions": c.other_deductions.format(),
            "total_allowances": self.total_allowances.format(),
            "total_deductions": self.total_deductions.format(),
            "gross_salary": self.gross_salary.format(),
            "net_salary": self.net_salary.format(),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class AttendanceCounts:
    days_worked: int
    days_absent: int = 0


@dataclass(frozen=True)
class AttendanceSuggestion:
    """Attendance proposed for a payroll period from approved leave."""

    attendance: AttendanceCounts
    leave_summary: LeaveSummary
    leave_balance: LeaveBalance
    from_leave_data: bool

    def to_dict(self) -> dict:
        return {
            "days_worked": self.attendance.days_worked,
            "days_absent": self.attendance.days_absent,
            "from_leave_data": self.from_leave_data,
            "leave_summary": self.leave_summary.to_dict(),
            "leave_balance": self.leave_balance.to_dict(),
        }


@dataclass(frozen=True)
class PayrollRecord:
    """One employee-month of pay.

    Gross and net are never stored independently: they are read off the
    ``breakdown`` computed from ``components``.
    """

    payroll_id: Optional[int]
    employee_id: str
    month: int
    year: int
    breakdown: PayrollBreakdown
    attendance: AttendanceCounts
    exchange_rate: Decimal = Decimal("0")
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    @property
    def components(self) -> SalaryComponents:
        return self.breakdown.components

    @property
    def gross_salary(self) -> Money:
        return self.breakdown.gross_salary

    @property
    def net_salary(self) -> Money:
        return self.breakdown.net_salary

    def to_dict(self) -> dict:
        data = {
            "payroll_id": self.payroll_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "days_worked": self.attendance.days_worked,
            "days_absent": self.attendance.days_absent,
            "exchange_rate": format_amount(self.exchange_rate),
            "payment_status": self.payment_status.value,
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "payment_method": self.payment_method,
            "notes": self.notes or "",
        }
        data.update(self.breakdown.to_dict())
        return data


@dataclass
class BulkPayrollResult:
    breakdowns: dict[str, PayrollBreakdown] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return len(self.breakdowns)

    @property
    def failed(self) -> int:
        return len(self.errors)


@dataclass(frozen=True)
class PayrollPeriodSummary:
    """Totals over every payroll record of one month."""

    month: int
    year: int
    record_count: int
    total_gross: Money
    total_net: Money
    total_deductions: Money
    average_net: Money
    status_counts: dict[PaymentStatus, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "currency": self.total_net.currency,
            "record_count": self.record_count,
            "total_gross": self.total_gross.format(),
            "total_net": self.total_net.format(),
            "total_deductions": self.total_deductions.format(),
            "average_net": self.average_net.format(),
            "status_counts": {s.value: self.status_counts.get(s, 0) for s in PaymentStatus},
        }
