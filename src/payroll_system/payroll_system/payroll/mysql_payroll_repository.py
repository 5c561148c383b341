from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.money import Money
from ..core.constants import DEFAULT_ANCHOR_CURRENCY
from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_decimal
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import AttendanceCounts, PayrollRecord, SalaryComponents
from .repository import PayrollRepository

_COLUMNS = """
    id, employee_id, month, year,
    basic_salary, allowances, transport_allowance, overtime_pay,
    deductions, national_insurance, income_tax,
    days_worked, days_absent, exchange_rate,
    payment_status, payment_date, payment_method, notes
"""


class MySQLPayrollRepository(PayrollRepository):
    """Stores allowance/deduction totals with their statutory sub-amounts.

    Gross and net columns are written for reporting but recomputed on read.
    """

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        calculator: Optional[PayrollCalculator] = None,
        currency: str = DEFAULT_ANCHOR_CURRENCY,
    ):
        self._conn_factory = conn_factory
        self._calculator = calculator or StandardPayrollCalculator()
        self._currency = currency

    def _row_to_record(self, r: dict) -> PayrollRecord:
        d = normalize_mysql_decimal
        allowances = d(r["allowances"])
        transport = d(r["transport_allowance"])
        deductions = d(r["deductions"])
        national_insurance = d(r["national_insurance"])
        income_tax = d(r["income_tax"])

        components = SalaryComponents.of(
            currency=self._currency,
            basic_salary=d(r["basic_salary"]),
            transport_allowance=transport,
            other_allowances=allowances - transport,
            overtime_pay=d(r["overtime_pay"]),
            national_insurance=national_insurance,
            income_tax=income_tax,
            other_deductions=deductions - national_insurance - income_tax,
        )
        return PayrollRecord(
            payroll_id=int(r["id"]),
            employee_id=str(r["employee_id"]),
            month=int(r["month"]),
            year=int(r["year"]),
            breakdown=self._calculator.calculate(components),
            attendance=AttendanceCounts(
                days_worked=int(r["days_worked"] or 0),
                days_absent=int(r["days_absent"] or 0),
            ),
            exchange_rate=d(r["exchange_rate"]),
            payment_status=PaymentStatus(r["payment_status"]),
            payment_date=normalize_mysql_date(r.get("payment_date")),
            payment_method=r.get("payment_method"),
            notes=r.get("notes"),
        )

    @staticmethod
    def _amounts(record: PayrollRecord) -> tuple:
        b = record.breakdown
        c = b.components

        def a(m: Money):
            return m.amount

        return (
            a(c.basic_salary),
            a(b.total_allowances),
            a(c.transport_allowance),
            a(c.overtime_pay),
            a(b.total_deductions),
            a(c.national_insurance),
            a(c.income_tax),
            a(b.gross_salary),
            a(b.net_salary),
        )

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll WHERE id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return self._row_to_record(r) if r else None

    def get_for_period(self, *, employee_id: str, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll WHERE employee_id=%s AND month=%s AND year=%s",
                (str(employee_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return self._row_to_record(r) if r else None

    def list_for_period(self, *, month: int, year: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll WHERE month=%s AND year=%s ORDER BY employee_id",
                (int(month), int(year)),
            )
            return [self._row_to_record(r) for r in fetchall(cur)]

    def create(self, record: PayrollRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll(
                    employee_id, month, year,
                    basic_salary, allowances, transport_allowance, overtime_pay,
                    deductions, national_insurance, income_tax,
                    gross_salary, net_salary,
                    days_worked, days_absent, exchange_rate,
                    payment_status, payment_date, payment_method, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    int(record.month),
                    int(record.year),
                    *self._amounts(record),
                    int(record.attendance.days_worked),
                    int(record.attendance.days_absent),
                    record.exchange_rate,
                    record.payment_status.value,
                    record.payment_date,
                    record.payment_method,
                    record.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, record: PayrollRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll
                SET basic_salary=%s, allowances=%s, transport_allowance=%s, overtime_pay=%s,
                    deductions=%s, national_insurance=%s, income_tax=%s,
                    gross_salary=%s, net_salary=%s,
                    days_worked=%s, days_absent=%s, exchange_rate=%s, notes=%s
                WHERE id=%s
                """,
                (
                    *self._amounts(record),
                    int(record.attendance.days_worked),
                    int(record.attendance.days_absent),
                    record.exchange_rate,
                    record.notes,
                    int(record.payroll_id),
                ),
            )
            return cur.rowcount > 0

    def update_status(
        self,
        *,
        payroll_id: int,
        status: PaymentStatus,
        payment_date: Optional[date] = None,
        payment_method: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll
                SET payment_status=%s,
                    payment_date=COALESCE(%s, payment_date),
                    payment_method=COALESCE(%s, payment_method)
                WHERE id=%s
                """,
                (status.value, payment_date, payment_method, int(payroll_id)),
            )
            return cur.rowcount > 0
