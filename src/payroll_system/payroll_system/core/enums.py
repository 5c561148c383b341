from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles as set in the session by the auth collaborator."""

    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class LeaveCategory(str, Enum):
    SICK = "sick"
    CASUAL = "casual"
    EARNED = "earned"
    UNPAID = "unpaid"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    PAID = "paid"


class LeaveAttribution(str, Enum):
    """How a leave request spanning a period boundary is counted.

    FULL_SPAN attributes the whole request to every period it touches.
    CLIPPED only counts the days falling inside the period.
    """

    FULL_SPAN = "full_span"
    CLIPPED = "clipped"


class AttendanceBasis(str, Enum):
    """Day count that absences are subtracted from when suggesting attendance."""

    CALENDAR = "calendar"
    WORKING = "working"
