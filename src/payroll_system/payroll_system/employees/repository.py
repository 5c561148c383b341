from __future__ import annotations

from typing import Optional, Protocol

from .model import EmployeeProfile


class EmployeeRepository(Protocol):
    """Employee reference store (read-only from the engine's point of view)."""

    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError
