from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .core.settings import PayrollSettings
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leave.aggregator import LeaveAggregator
from .leave.balance import LeaveBalanceTracker
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveRequestService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .payslip.assembler import PayslipAssembler
from .payslip.service import PayslipService


@dataclass(frozen=True)
class Container:
    settings: PayrollSettings

    leave_repo: LeaveRepository
    payroll_repo: PayrollRepository
    employee_repo: EmployeeRepository

    leave_aggregator: LeaveAggregator
    leave_balance_tracker: LeaveBalanceTracker
    leave_request_service: LeaveRequestService
    payroll_service: PayrollService
    payslip_service: PayslipService


def wire_services(
    *,
    settings: PayrollSettings,
    leave_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    employee_repo: EmployeeRepository,
) -> Container:
    """Assemble services over any repository implementations (MySQL or in-memory)."""
    calculator = StandardPayrollCalculator()

    aggregator = LeaveAggregator(leave_repo, policy=settings.leave_attribution)
    balances = LeaveBalanceTracker(
        leave_repo,
        entitlement=settings.annual_leave_entitlement,
        category_entitlements=settings.category_entitlements,
    )
    payroll_service = PayrollService(
        payroll_repo,
        aggregator,
        balances,
        settings=settings,
        calculator=calculator,
    )
    payslip_service = PayslipService(
        payroll_repo,
        employee_repo,
        aggregator,
        settings=settings,
        assembler=PayslipAssembler(calculator, local_currency=settings.local_currency),
    )

    return Container(
        settings=settings,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        employee_repo=employee_repo,
        leave_aggregator=aggregator,
        leave_balance_tracker=balances,
        leave_request_service=LeaveRequestService(leave_repo),
        payroll_service=payroll_service,
        payslip_service=payslip_service,
    )


def build_container(*, db_config: Mapping, settings: PayrollSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_services(
        settings=settings,
        leave_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn, currency=settings.anchor_currency),
        employee_repo=MySQLEmployeeRepository(conn),
    )
