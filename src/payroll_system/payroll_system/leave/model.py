from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveCategory, LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a leave request and its approval outcome."""

    request_id: int
    employee_id: str
    leave_type: LeaveCategory
    start_date: date
    end_date: date
    total_days: int
    reason: Optional[str]
    status: LeaveStatus
    created_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    comments: Optional[str] = None

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "total_days": self.total_days,
            "reason": self.reason or "",
            "status": self.status.value,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M") if self.created_at else None,
            "approved_by": self.approved_by,
            "approved_at": self.approved_at.strftime("%Y-%m-%d %H:%M") if self.approved_at else None,
            "comments": self.comments or "",
        }


@dataclass(frozen=True)
class LeaveRequestDraft:
    """Unvalidated submission as it arrives from a form or API body."""

    employee_id: Optional[str] = None
    leave_type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: dict) -> "LeaveRequestDraft":
        def _s(key: str) -> Optional[str]:
            v = data.get(key)
            return None if v is None else str(v)

        return cls(
            employee_id=_s("employee_id"),
            leave_type=_s("leave_type"),
            start_date=_s("start_date"),
            end_date=_s("end_date"),
            reason=_s("reason"),
        )


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LeaveSummary:
    """Approved leave days attributed to one employee-period.

    ``available`` is False when the leave store could not be read and the
    counts are placeholders.
    """

    approved_leave_days: int = 0
    unpaid_leave_days: int = 0
    sick_leave_days: int = 0
    casual_leave_days: int = 0
    available: bool = True

    @classmethod
    def unavailable(cls) -> "LeaveSummary":
        return cls(available=False)

    def to_dict(self) -> dict:
        return {
            "approved_leave_days": self.approved_leave_days,
            "unpaid_leave_days": self.unpaid_leave_days,
            "sick_leave_days": self.sick_leave_days,
            "casual_leave_days": self.casual_leave_days,
            "available": self.available,
        }


@dataclass(frozen=True)
class CategoryBalance:
    category: LeaveCategory
    entitlement: Optional[int]
    taken: int

    @property
    def remaining(self) -> Optional[int]:
        if self.entitlement is None:
            return None
        return self.entitlement - self.taken


@dataclass(frozen=True)
class LeaveBalance:
    """Yearly leave taken against the annual entitlement.

    ``remaining`` may be negative; that signals over-leave and is kept as is.
    """

    year: int
    entitlement: int
    taken: int
    by_category: dict[LeaveCategory, CategoryBalance] = field(default_factory=dict)
    available: bool = True

    @property
    def remaining(self) -> int:
        return self.entitlement - self.taken

    @classmethod
    def unavailable(cls, *, year: int, entitlement: int) -> "LeaveBalance":
        return cls(year=year, entitlement=entitlement, taken=0, available=False)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "entitlement": self.entitlement,
            "taken": self.taken,
            "remaining": self.remaining,
            "available": self.available,
            "by_category": {
                cat.value: {"entitlement": b.entitlement, "taken": b.taken, "remaining": b.remaining}
                for cat, b in self.by_category.items()
            },
        }
