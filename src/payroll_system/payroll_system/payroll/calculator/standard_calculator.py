from __future__ import annotations

from .base import PayrollCalculator
from ..model import PayrollBreakdown, SalaryComponents


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross = basic + allowances + overtime; net = gross - deductions.

    A negative net is reported as a warning, never corrected.
    """

    def calculate(self, components: SalaryComponents) -> PayrollBreakdown:
        c = components
        total_allowances = c.other_allowances + c.transport_allowance
        total_deductions = c.other_deductions + c.national_insurance + c.income_tax
        gross_salary = c.basic_salary + total_allowances + c.overtime_pay
        net_salary = gross_salary - total_deductions

        warnings: list[str] = []
        if net_salary.is_negative:
            warnings.append(
                f"Net salary is negative ({net_salary.format()} {net_salary.currency}); check deductions"
            )

        return PayrollBreakdown(
            components=c,
            total_allowances=total_allowances,
            total_deductions=total_deductions,
            gross_salary=gross_salary,
            net_salary=net_salary,
            warnings=tuple(warnings),
        )
