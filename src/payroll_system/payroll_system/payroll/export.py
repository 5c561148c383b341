from __future__ import annotations

import calendar
import io
from typing import Iterable

import pandas as pd

from ..common.money import format_amount
from ..core.constants import DEFAULT_ANCHOR_CURRENCY, DEFAULT_LOCAL_CURRENCY
from ..currency.converter import CurrencyConverter
from ..employees.repository import EmployeeRepository
from .model import PayrollRecord


def export_columns(anchor_currency: str, local_currency: str) -> list[str]:
    return [
        "Employee ID",
        "Employee Name",
        "Job Title",
        "Month",
        "Year",
        "Basic Salary",
        "Transport Allowance",
        "Other Allowances",
        "Overtime Pay",
        "Gross Salary",
        "National Insurance",
        "Income Tax",
        "Other Deductions",
        "Total Deductions",
        "Net Salary",
        f"Exchange Rate ({local_currency} per {anchor_currency})",
        f"Net Salary ({local_currency})",
        "Days Worked",
        "Days Absent",
        "Payment Status",
        "Payment Date",
        "Payment Method",
        "Notes",
    ]


def payroll_export_frame(
    records: Iterable[PayrollRecord],
    employees: EmployeeRepository,
    *,
    anchor_currency: str = DEFAULT_ANCHOR_CURRENCY,
    local_currency: str = DEFAULT_LOCAL_CURRENCY,
) -> pd.DataFrame:
    """One row per payroll record, amounts as two-decimal strings.

    The local net column reads N/A when the record has no exchange rate.
    """
    columns = export_columns(anchor_currency, local_currency)
    rows = []
    for r in records:
        emp = employees.get_by_id(r.employee_id)
        c = r.components
        b = r.breakdown
        local_net = CurrencyConverter(r.exchange_rate, currency=local_currency).to_local(r.net_salary)
        rows.append(
            [
                emp.employee_number if emp else r.employee_id,
                emp.full_name if emp else "",
                (emp.position or "") if emp else "",
                calendar.month_name[r.month],
                r.year,
                c.basic_salary.format(),
                c.transport_allowance.format(),
                c.other_allowances.format(),
                c.overtime_pay.format(),
                b.gross_salary.format(),
                c.national_insurance.format(),
                c.income_tax.format(),
                c.other_deductions.format(),
                b.total_deductions.format(),
                b.net_salary.format(),
                format_amount(r.exchange_rate),
                local_net.format(),
                r.attendance.days_worked,
                r.attendance.days_absent,
                r.payment_status.value,
                r.payment_date.isoformat() if r.payment_date else "",
                r.payment_method or "",
                r.notes or "",
            ]
        )
    return pd.DataFrame(rows, columns=columns)


def payroll_export_csv(records: Iterable[PayrollRecord], employees: EmployeeRepository, **currencies) -> io.BytesIO:
    out = io.BytesIO()
    out.write(payroll_export_frame(records, employees, **currencies).to_csv(index=False).encode("utf-8"))
    out.seek(0)
    return out
