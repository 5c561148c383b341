from __future__ import annotations

from itertools import zip_longest
from typing import Optional

from ..common.datetime_utils import period_label
from ..common.money import Money
from ..core.constants import DEFAULT_LOCAL_CURRENCY
from ..currency.converter import CurrencyConverter
from ..employees.model import CompanyProfile, EmployeeProfile
from ..leave.model import LeaveSummary
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.model import PayrollRecord
from .model import AmountCell, EarningsDeductionsRow, EmployeeDetails, LeaveSummaryRow, LineItem, Payslip


def employee_details(employee: EmployeeProfile) -> EmployeeDetails:
    f = employee.field_or_marker
    return EmployeeDetails(
        employee_number=f("employee_number"),
        pay_point=f("city"),
        name=employee.full_name,
        anchor_account_number=f("anchor_account_number"),
        department=f("department"),
        bank_name=f("bank_name"),
        national_id=f("national_id"),
        employment_status=f("employment_status"),
        position=f("position"),
        local_account_number=f("local_account_number"),
        branch_code=f("branch_code"),
        employment_type=f("employment_type"),
    )


def leave_summary_rows(summary: LeaveSummary) -> tuple[LeaveSummaryRow, ...]:
    return (
        LeaveSummaryRow(label="Annual Leave", taken=summary.approved_leave_days),
        LeaveSummaryRow(label="Unpaid Leave", taken=summary.unpaid_leave_days),
        LeaveSummaryRow(label="Sick Leave", taken=summary.sick_leave_days),
        LeaveSummaryRow(label="Casual Leave", taken=summary.casual_leave_days),
    )


class PayslipAssembler:
    """Arrange one payroll record into the fixed two-currency payslip layout.

    All figures come from the payroll calculator and the currency converter.
    """

    def __init__(
        self,
        calculator: Optional[PayrollCalculator] = None,
        *,
        local_currency: str = DEFAULT_LOCAL_CURRENCY,
    ):
        self._calculator = calculator or StandardPayrollCalculator()
        self._local_currency = local_currency

    def assemble(
        self,
        record: PayrollRecord,
        employee: EmployeeProfile,
        leave_summary: LeaveSummary,
        company: CompanyProfile,
    ) -> Payslip:
        breakdown = self._calculator.calculate(record.components)
        c = breakdown.components
        converter = CurrencyConverter(record.exchange_rate, currency=self._local_currency)

        def item(label: str, amount: Money) -> LineItem:
            return LineItem(label=label, amount=AmountCell(anchor=amount, local=converter.to_local(amount)))

        earnings = [item("Basic", c.basic_salary), item("Transport Allowance", c.transport_allowance)]
        if not c.other_allowances.is_zero:
            earnings.append(item("Other Allowances", c.other_allowances))

        deductions = [item("National Insurance", c.national_insurance), item("Income Tax", c.income_tax)]
        if not c.other_deductions.is_zero:
            deductions.append(item("Other Deductions", c.other_deductions))

        rows = [EarningsDeductionsRow(earning=e, deduction=d) for e, d in zip_longest(earnings, deductions)]
        rows.append(
            EarningsDeductionsRow(
                earning=item("GROSS", breakdown.gross_salary),
                deduction=item("TOTAL DEDUCTIONS", breakdown.total_deductions),
            )
        )

        rate_note = None
        if converter.available:
            rate_note = f"Exchange Rate: 1 {c.currency} = {converter.rate:,.2f} {self._local_currency}"

        return Payslip(
            company=company,
            employee=employee_details(employee),
            payroll_id=record.payroll_id,
            month=record.month,
            year=record.year,
            period=period_label(record.month, record.year),
            anchor_currency=c.currency,
            local_currency=self._local_currency,
            exchange_rate_note=rate_note,
            rows=tuple(rows),
            net_pay=AmountCell(anchor=breakdown.net_salary, local=converter.to_local(breakdown.net_salary)),
            leave_summary=leave_summary_rows(leave_summary),
            leave_data_available=leave_summary.available,
            warnings=breakdown.warnings,
        )
