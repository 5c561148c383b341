from __future__ import annotations

from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.common.money import to_decimal
from src.payroll_system.payroll_system.core.exceptions import ValidationError


@pytest.mark.parametrize("value", ["NaN", "sNaN", "Infinity", "-inf", float("nan"), Decimal("Infinity")])
def test_non_finite_input_is_a_validation_error(value):
    with pytest.raises(ValidationError, match="Basic salary must be a number"):
        to_decimal(value, "Basic salary")


def test_blank_means_zero_and_floats_keep_their_short_form():
    assert to_decimal("") == Decimal("0")
    assert to_decimal(None) == Decimal("0")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(" 12.50 ") == Decimal("12.50")


def test_booleans_and_words_are_rejected():
    with pytest.raises(ValidationError):
        to_decimal(True)
    with pytest.raises(ValidationError):
        to_decimal("ten")
