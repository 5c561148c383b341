from __future__ import annotations

from decimal import Decimal
from typing import Union

from ..common.money import UNAVAILABLE, LocalAmount, Money, to_decimal
from ..core.constants import DEFAULT_LOCAL_CURRENCY
from ..core.exceptions import ValidationError

Number = Union[int, float, str, Decimal]


def to_local(
    anchor_amount: Union[Money, Number],
    exchange_rate: Number,
    *,
    currency: str = DEFAULT_LOCAL_CURRENCY,
) -> LocalAmount:
    """Convert an anchor-currency amount using a rate snapshot.

    ``exchange_rate`` is local units per 1 anchor unit; 0 (or missing) means no
    quote exists for the period and yields ``UNAVAILABLE``.
    """
    rate = to_decimal(exchange_rate, "Exchange rate")
    if rate < 0:
        raise ValidationError("Exchange rate cannot be negative")
    if rate == 0:
        return UNAVAILABLE

    amount = anchor_amount.amount if isinstance(anchor_amount, Money) else to_decimal(anchor_amount)
    return Money(amount * rate, currency)


class CurrencyConverter:
    """Binds a rate snapshot and the local currency code for repeated conversion."""

    def __init__(self, exchange_rate: Number, *, currency: str = DEFAULT_LOCAL_CURRENCY):
        self._rate = to_decimal(exchange_rate, "Exchange rate")
        self._currency = currency

    @property
    def rate(self) -> Decimal:
        return self._rate

    @property
    def available(self) -> bool:
        return self._rate > 0

    def to_local(self, anchor_amount: Union[Money, Number]) -> LocalAmount:
        return to_local(anchor_amount, self._rate, currency=self._currency)
