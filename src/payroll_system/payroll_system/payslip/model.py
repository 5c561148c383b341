from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.money import LocalAmount, Money
from ..employees.model import CompanyProfile


@dataclass(frozen=True)
class AmountCell:
    """An anchor amount and its local equivalent (or UNAVAILABLE)."""

    anchor: Money
    local: LocalAmount

    def to_dict(self) -> dict:
        return {"anchor": self.anchor.format(), "local": self.local.format()}


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: AmountCell

    def to_dict(self) -> dict:
        return {"label": self.label, **self.amount.to_dict()}


@dataclass(frozen=True)
class EarningsDeductionsRow:
    """One printed row: an earning on the left, a deduction on the right."""

    earning: Optional[LineItem]
    deduction: Optional[LineItem]

    def to_dict(self) -> dict:
        return {
            "earning": self.earning.to_dict() if self.earning else None,
            "deduction": self.deduction.to_dict() if self.deduction else None,
        }


@dataclass(frozen=True)
class EmployeeDetails:
    employee_number: str
    pay_point: str
    name: str
    anchor_account_number: str
    department: str
    bank_name: str
    national_id: str
    employment_status: str
    position: str
    local_account_number: str
    branch_code: str
    employment_type: str

    LABELS = (
        ("employee_number", "Employee Number"),
        ("pay_point", "Pay Point"),
        ("name", "Employee Name"),
        ("anchor_account_number", "Nostro Account Number"),
        ("department", "Department"),
        ("bank_name", "Bank"),
        ("national_id", "I.D. Number"),
        ("employment_status", "Employment Status"),
        ("position", "Position"),
        ("local_account_number", "Local Account Number"),
        ("branch_code", "Branch Code"),
        ("employment_type", "Employment Type"),
    )

    def rows(self) -> list[tuple[str, str]]:
        return [(label, getattr(self, name)) for name, label in self.LABELS]

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name, _ in self.LABELS}


@dataclass(frozen=True)
class LeaveSummaryRow:
    label: str
    taken: int
    # Not tracked per period yet; printed blank.
    opening_balance: Optional[int] = None
    closing_balance: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "opening_balance": self.opening_balance,
            "taken": self.taken,
            "closing_balance": self.closing_balance,
        }


@dataclass(frozen=True)
class Payslip:
    company: CompanyProfile
    employee: EmployeeDetails
    payroll_id: Optional[int]
    month: int
    year: int
    period: str
    anchor_currency: str
    local_currency: str
    exchange_rate_note: Optional[str]
    rows: tuple[EarningsDeductionsRow, ...]
    net_pay: AmountCell
    leave_summary: tuple[LeaveSummaryRow, ...]
    leave_data_available: bool = True
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "company": self.company.to_dict(),
            "employee": self.employee.to_dict(),
            "payroll_id": self.payroll_id,
            "month": self.month,
            "year": self.year,
            "period": self.period,
            "currencies": {"anchor": self.anchor_currency, "local": self.local_currency},
            "exchange_rate_note": self.exchange_rate_note,
            "earnings_deductions": [r.to_dict() for r in self.rows],
            "net_pay": self.net_pay.to_dict(),
            "leave_summary": [r.to_dict() for r in self.leave_summary],
            "leave_data_available": self.leave_data_available,
            "warnings": list(self.warnings),
        }
