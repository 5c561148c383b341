from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import EmployeeProfile
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.id, e.employee_number, e.first_name, e.last_name,
                       e.job_title, d.name AS department_name, e.city,
                       e.bank_name, e.nostro_account_number, e.local_account_number,
                       e.branch_code, e.national_id, e.employment_status, e.employment_type
                FROM employees e
                LEFT JOIN departments d ON d.id = e.department_id
                WHERE e.id=%s
                """,
                (str(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return EmployeeProfile(
                employee_id=str(r["id"]),
                employee_number=str(r["employee_number"] or ""),
                first_name=r["first_name"] or "",
                last_name=r.get("last_name") or "",
                position=r.get("job_title"),
                department=r.get("department_name"),
                city=r.get("city"),
                bank_name=r.get("bank_name"),
                anchor_account_number=r.get("nostro_account_number"),
                local_account_number=r.get("local_account_number"),
                branch_code=r.get("branch_code"),
                national_id=r.get("national_id"),
                employment_status=r.get("employment_status"),
                employment_type=r.get("employment_type"),
            )
