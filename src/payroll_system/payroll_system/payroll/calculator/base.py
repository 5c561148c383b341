from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollBreakdown, SalaryComponents


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, components: SalaryComponents) -> PayrollBreakdown:
        raise NotImplementedError
