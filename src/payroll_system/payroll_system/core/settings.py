from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Mapping

from ..employees.model import CompanyProfile
from .constants import (
    DEFAULT_ANCHOR_CURRENCY,
    DEFAULT_ANNUAL_LEAVE_ENTITLEMENT,
    DEFAULT_CATEGORY_ENTITLEMENTS,
    DEFAULT_LOCAL_CURRENCY,
    DEFAULT_WORKING_DAYS_PER_MONTH,
)
from .enums import AttendanceBasis, LeaveAttribution, LeaveCategory


def _category_map(raw: Mapping[str, int]) -> dict[LeaveCategory, int]:
    return {LeaveCategory(k): int(v) for k, v in raw.items()}


@dataclass(frozen=True)
class PayrollSettings:
    """Engine configuration, passed explicitly into each component."""

    annual_leave_entitlement: int = DEFAULT_ANNUAL_LEAVE_ENTITLEMENT
    category_entitlements: dict[LeaveCategory, int] = field(
        default_factory=lambda: _category_map(DEFAULT_CATEGORY_ENTITLEMENTS)
    )
    default_working_days: int = DEFAULT_WORKING_DAYS_PER_MONTH
    leave_attribution: LeaveAttribution = LeaveAttribution.FULL_SPAN
    attendance_basis: AttendanceBasis = AttendanceBasis.CALENDAR
    anchor_currency: str = DEFAULT_ANCHOR_CURRENCY
    local_currency: str = DEFAULT_LOCAL_CURRENCY
    company: CompanyProfile = field(default_factory=lambda: CompanyProfile(name="Company"))

    @classmethod
    def from_module(cls, settings: ModuleType) -> "PayrollSettings":
        """Read the payroll keys of a ``config.*`` settings module, falling back to defaults."""
        company = getattr(settings, "COMPANY", None) or {}
        return cls(
            annual_leave_entitlement=int(getattr(settings, "ANNUAL_LEAVE_ENTITLEMENT", DEFAULT_ANNUAL_LEAVE_ENTITLEMENT)),
            category_entitlements=_category_map(getattr(settings, "CATEGORY_ENTITLEMENTS", DEFAULT_CATEGORY_ENTITLEMENTS)),
            default_working_days=int(getattr(settings, "DEFAULT_WORKING_DAYS", DEFAULT_WORKING_DAYS_PER_MONTH)),
            leave_attribution=LeaveAttribution(getattr(settings, "LEAVE_ATTRIBUTION", LeaveAttribution.FULL_SPAN.value)),
            attendance_basis=AttendanceBasis(getattr(settings, "ATTENDANCE_BASIS", AttendanceBasis.CALENDAR.value)),
            anchor_currency=str(getattr(settings, "ANCHOR_CURRENCY", DEFAULT_ANCHOR_CURRENCY)),
            local_currency=str(getattr(settings, "LOCAL_CURRENCY", DEFAULT_LOCAL_CURRENCY)),
            company=CompanyProfile(
                name=str(company.get("name", "Company")),
                logo=company.get("logo"),
                tagline=company.get("tagline"),
            ),
        )
