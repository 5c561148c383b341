from __future__ import annotations

from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.common.money import UNAVAILABLE, Money
from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.currency.converter import CurrencyConverter, to_local


def test_conversion_multiplies_by_rate():
    assert to_local(100, 1350) == Money(Decimal("135000"), "ZWL")


def test_zero_rate_is_unavailable_not_zero():
    result = to_local(100, 0)
    assert result is UNAVAILABLE
    assert result.format() == "N/A"
    assert not result


def test_missing_rate_is_unavailable():
    assert to_local(Money.of(5, "USD"), None) is UNAVAILABLE


def test_negative_rate_is_rejected():
    with pytest.raises(ValidationError):
        to_local(100, -1)


def test_converter_keeps_local_currency_code():
    converter = CurrencyConverter("2.5", currency="ZAR")
    assert converter.available
    assert converter.to_local(Money.of("10.10", "USD")) == Money(Decimal("25.250"), "ZAR")
    assert converter.to_local(Money.of("10.10", "USD")).format() == "25.25"


def test_converter_without_rate():
    converter = CurrencyConverter(0)
    assert not converter.available
    assert converter.to_local(100) is UNAVAILABLE
