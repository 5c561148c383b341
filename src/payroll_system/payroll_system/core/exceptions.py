from __future__ import annotations

from typing import Iterable, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    Carries every accumulated message in ``errors``; ``str(exc)`` joins them.
    """

    def __init__(self, message: str = "", errors: Optional[Iterable[str]] = None):
        self.errors = list(errors or ([message] if message else []))
        super().__init__(message or "; ".join(self.errors))


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class CurrencyMismatchError(DomainError):
    """Raised when money in two different currencies is combined."""
