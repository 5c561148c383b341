"""Monetary value objects.

Amounts are ``Decimal`` and always carry a currency code. A local-currency
figure that cannot be derived (no exchange rate for the period) is the
``UNAVAILABLE`` sentinel, never zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..core.constants import UNAVAILABLE_MARKER
from ..core.exceptions import CurrencyMismatchError, ValidationError

TWO_PLACES = Decimal("0.01")


def to_decimal(value, field_name: str = "Amount") -> Decimal:
    """Coerce user/driver input into Decimal. ``None`` and ``""`` mean 0."""
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, str) and not value.strip():
        return Decimal("0")

    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, float):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        d = Decimal(str(value))
    else:
        try:
            d = Decimal(str(value).strip() if isinstance(value, str) else value)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValidationError(f"{field_name} must be a number") from exc
    # NaN and Infinity parse but cannot be compared or summed safely
    if not d.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return d


def format_amount(amount: Decimal) -> str:
    return f"{amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP):.2f}"


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str

    @classmethod
    def of(cls, value, currency: str) -> "Money":
        return cls(amount=to_decimal(value), currency=currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(amount=Decimal("0"), currency=currency)

    def _check(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot combine Money with {type(other).__name__}")
        if other.currency != self.currency:
            raise CurrencyMismatchError(f"Cannot combine {self.currency} with {other.currency}")

    def __add__(self, other: "Money") -> "Money":
        self._check(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._check(other)
        return Money(self.amount - other.amount, self.currency)

    def times(self, factor) -> "Money":
        return Money(self.amount * to_decimal(factor), self.currency)

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def format(self) -> str:
        return format_amount(self.amount)

    def __str__(self) -> str:
        return f"{self.format()} {self.currency}"


class Unavailable:
    """Local-currency amount that cannot be derived. Falsy, renders as N/A."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"

    def format(self) -> str:
        return UNAVAILABLE_MARKER

    def __str__(self) -> str:
        return UNAVAILABLE_MARKER


UNAVAILABLE = Unavailable()

LocalAmount = Union[Money, Unavailable]
