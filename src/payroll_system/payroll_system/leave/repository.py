from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveCategory, LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    """Leave store interface.

    Note (DIP): aggregator, balance tracker and service depend on this
    interface, not on a concrete database.
    """

    # Read side used by the engine
    def list_approved_overlapping(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_approved_for_year(self, *, employee_id: str, year: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    # Lifecycle
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
        raise NotImplementedError

    def get_by_id(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(
        self,
        *,
        employee_id: str,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approved_by: str,
        comments: Optional[str] = None,
    ) -> bool:
        """Resolve a pending request. Returns False if it was not pending."""

        raise NotImplementedError

    def delete(self, *, request_id: int) -> bool:
        raise NotImplementedError
