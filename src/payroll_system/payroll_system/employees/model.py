from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import UNAVAILABLE_MARKER


@dataclass(frozen=True)
class EmployeeProfile:
    """Read-only employee reference data used on payslip headers."""

    employee_id: str
    employee_number: str
    first_name: str
    last_name: str
    position: Optional[str] = None
    department: Optional[str] = None
    city: Optional[str] = None
    bank_name: Optional[str] = None
    anchor_account_number: Optional[str] = None
    local_account_number: Optional[str] = None
    branch_code: Optional[str] = None
    national_id: Optional[str] = None
    employment_status: Optional[str] = None
    employment_type: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()

    def field_or_marker(self, name: str) -> str:
        value = getattr(self, name)
        return str(value) if value else UNAVAILABLE_MARKER


@dataclass(frozen=True)
class CompanyProfile:
    """Static company identity printed at the top of every payslip."""

    name: str
    logo: Optional[str] = None
    tagline: Optional[str] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "logo": self.logo, "tagline": self.tagline}
