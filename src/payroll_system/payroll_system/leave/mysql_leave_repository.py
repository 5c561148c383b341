from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveCategory, LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    id, employee_id, leave_type, start_date, end_date, total_days,
    reason, status, created_at, approved_by, approved_at, comments
"""


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        employee_id=str(r["employee_id"]),
        leave_type=LeaveCategory(r["leave_type"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r["end_date"]),
        total_days=int(r["total_days"] or 0),
        reason=r.get("reason"),
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        comments=r.get("comments"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_overlapping(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND status=%s
                  AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                """,
                (str(employee_id), LeaveStatus.APPROVED.value, end_date, start_date),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def list_approved_for_year(self, *, employee_id: str, year: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND status=%s
                  AND start_date BETWEEN %s AND %s
                ORDER BY start_date
                """,
                (str(employee_id), LeaveStatus.APPROVED.value, date(int(year), 1, 1), date(int(year), 12, 31)),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: str,
        leave_type: LeaveCategory,
        start_date: date,
        end_date: date,
        total_days: int,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, total_days, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(employee_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    int(total_days),
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_for_employee(
        self,
        *,
        employee_id: str,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["employee_id=%s"]
        params: list[object] = [str(employee_id)]

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approved_by: str,
        comments: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=NOW(), comments=%s
                WHERE id=%s AND status=%s
                """,
                (
                    status.value,
                    str(approved_by),
                    comments,
                    int(request_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE id=%s", (int(request_id),))
            return cur.rowcount > 0
