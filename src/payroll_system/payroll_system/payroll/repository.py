from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, *, employee_id: str, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_period(self, *, month: int, year: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def create(self, record: PayrollRecord) -> int:
        raise NotImplementedError

    def update(self, record: PayrollRecord) -> bool:
        """Persist components, derived figures and attendance of an existing record."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        payroll_id: int,
        status: PaymentStatus,
        payment_date: Optional[date] = None,
        payment_method: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
