from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core.exceptions import DomainError, NotFoundError
from ..core.settings import PayrollSettings
from ..employees.repository import EmployeeRepository
from ..leave.aggregator import LeaveAggregator
from ..payroll.model import PayrollRecord
from ..payroll.repository import PayrollRepository
from .assembler import PayslipAssembler
from .model import Payslip

logger = logging.getLogger(__name__)


@dataclass
class BulkPayslipResult:
    payslips: list[Payslip] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)


class PayslipService:
    """Use case: build payslips for stored payroll records."""

    def __init__(
        self,
        payrolls: PayrollRepository,
        employees: EmployeeRepository,
        aggregator: LeaveAggregator,
        *,
        settings: Optional[PayrollSettings] = None,
        assembler: Optional[PayslipAssembler] = None,
    ):
        self._payrolls = payrolls
        self._employees = employees
        self._aggregator = aggregator
        self._settings = settings or PayrollSettings()
        self._assembler = assembler or PayslipAssembler(local_currency=self._settings.local_currency)

    def generate_for_record(self, record: PayrollRecord) -> Payslip:
        employee = self._employees.get_by_id(record.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        # A leave store outage degrades the leave block, never the payslip
        summary = self._aggregator.get_employee_leave_data_or_default(record.employee_id, record.month, record.year)
        return self._assembler.assemble(record, employee, summary, self._settings.company)

    def generate(self, payroll_id: int) -> Payslip:
        record = self._payrolls.get_by_id(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll record not found")
        return self.generate_for_record(record)

    def generate_bulk(self, *, month: int, year: int) -> BulkPayslipResult:
        result = BulkPayslipResult()
        for record in self._payrolls.list_for_period(month=int(month), year=int(year)):
            try:
                result.payslips.append(self.generate_for_record(record))
            except DomainError as e:
                result.errors[record.employee_id] = str(e)

        logger.info(
            "Generated %d payslips for %02d/%d (%d failed)",
            len(result.payslips),
            int(month),
            int(year),
            len(result.errors),
        )
        return result
