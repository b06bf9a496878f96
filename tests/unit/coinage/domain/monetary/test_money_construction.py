from __future__ import annotations

from decimal import Decimal

import pytest

from coinage.domain.monetary.currency import Currency, CurrencyType
from coinage.domain.monetary.currency_registry import BTC, EUR, JPY, USD
from coinage.domain.monetary.errors import InvalidMoneyStateError
from coinage.domain.monetary.money import Money
from coinage.domain.monetary.rounding import RoundingPolicy

HALF_EVEN = RoundingPolicy.HALF_EVEN


@pytest.mark.parametrize(
    "amount, currency, rounding",
    [
        (Decimal("10.00"), USD, HALF_EVEN),
        (Decimal("10"), USD, RoundingPolicy.HALF_UP),
        (Decimal("-0.5"), EUR, RoundingPolicy.DOWN),
        (Decimal("1500"), JPY, RoundingPolicy.FLOOR),
        (Decimal("0.00000001"), BTC, RoundingPolicy.UP),
        (Decimal("12E+3"), USD, HALF_EVEN),
    ],
)
def test_valid_fields_are_stored_unchanged(amount, currency, rounding):
    testee = Money(amount, currency, rounding)

    assert testee.amount == amount
    assert testee.scale == -amount.as_tuple().exponent
    assert testee.currency is currency
    assert testee.rounding is rounding


def test_negative_scale_is_allowed():
    testee = Money(Decimal("12E+3"), USD, HALF_EVEN)
    assert testee.scale == -3
    assert testee.amount == Decimal("12000")


@pytest.mark.parametrize(
    "amount, currency",
    [
        ("10.123", USD),
        ("0.001", EUR),
        ("1.5", JPY),
        ("0.000000001", BTC),
    ],
)
def test_too_many_decimals_are_rejected(amount, currency):
    with pytest.raises(InvalidMoneyStateError, match="Number of decimals is"):
        Money(amount, currency, HALF_EVEN)


def test_trailing_zeros_count_as_decimals():
    # Numerically 10, but carries 3 decimals
    with pytest.raises(InvalidMoneyStateError):
        Money(Decimal("10.000"), USD, HALF_EVEN)


@pytest.mark.parametrize(
    "amount, currency, rounding, message",
    [
        (None, USD, HALF_EVEN, "Amount cannot be None"),
        ("1", None, HALF_EVEN, "Currency cannot be None"),
        ("1", USD, None, "Rounding policy cannot be None"),
    ],
)
def test_missing_fields_are_rejected(amount, currency, rounding, message):
    with pytest.raises(InvalidMoneyStateError, match=message):
        Money(amount, currency, rounding)


@pytest.mark.parametrize("amount", ["abc", "", "NaN", "Infinity", Decimal("-Infinity"), True, [1]])
def test_non_numeric_amount_is_rejected(amount):
    with pytest.raises(InvalidMoneyStateError):
        Money(amount, USD, HALF_EVEN)


def test_wrong_types_of_currency_and_rounding_raise_type_error():
    with pytest.raises(TypeError, match=r"\$currency"):
        Money("1", "USD", HALF_EVEN)
    with pytest.raises(TypeError, match=r"\$rounding"):
        Money("1", USD, "HALF_EVEN")


def test_invalid_state_error_is_a_value_error():
    with pytest.raises(ValueError):
        Money("0.001", USD, HALF_EVEN)


def test_amount_conversions():
    assert Money(5, USD, HALF_EVEN).amount == Decimal("5")
    assert Money(" 5.25 ", USD, HALF_EVEN).amount == Decimal("5.25")
    # Float goes through its shortest string form, not its binary expansion
    assert Money(0.1, USD, HALF_EVEN).amount == Decimal("0.1")
    assert Money(0.1, USD, HALF_EVEN).scale == 1


def test_negative_zero_is_stored_without_sign():
    testee = Money(Decimal("-0.00"), USD, HALF_EVEN)
    assert not testee.amount.is_signed()
    assert testee.scale == 2
    assert testee == Money(Decimal("0.00"), USD, HALF_EVEN)


def test_custom_currency_precision_is_respected():
    dinar = Currency("TND", 3, "Tunisian Dinar", CurrencyType.FIAT, "DT")
    assert Money("1.234", dinar, HALF_EVEN).scale == 3
    with pytest.raises(InvalidMoneyStateError, match="only takes 3 decimals"):
        Money("1.2345", dinar, HALF_EVEN)


def test_money_is_immutable():
    testee = Money("10.00", USD, HALF_EVEN)

    with pytest.raises(AttributeError):
        testee.amount = Decimal("20.00")
    with pytest.raises(AttributeError):
        testee._amount = Decimal("20.00")
    with pytest.raises(AttributeError):
        del testee._currency

    assert testee.amount == Decimal("10.00")


@pytest.mark.parametrize(
    "money, expected",
    [
        (Money("10.00", USD, HALF_EVEN), "10.00 $"),
        (Money("-0.5", EUR, HALF_EVEN), "-0.5 €"),
        (Money("1500", JPY, HALF_EVEN), "1500 ¥"),
        (Money(Decimal("12E+3"), USD, HALF_EVEN), "12000 $"),
    ],
)
def test_str_is_plain_amount_and_symbol(money, expected):
    assert str(money) == expected


def test_repr():
    assert repr(Money("10.00", USD, HALF_EVEN)) == "Money(10.00, USD, HALF_EVEN)"


def test_predicates():
    assert Money("0.01", USD, HALF_EVEN).is_positive()
    assert not Money("0.01", USD, HALF_EVEN).is_negative()
    assert Money("-0.01", USD, HALF_EVEN).is_negative()
    assert Money("0.00", USD, HALF_EVEN).is_zero()
    assert Money("0", USD, HALF_EVEN).is_zero()
    assert not Money("0", USD, HALF_EVEN).is_positive()
    assert not Money("0", USD, HALF_EVEN).is_negative()


def test_is_same_currency_as():
    testee = Money("1.00", USD, HALF_EVEN)

    assert testee.is_same_currency_as(Money("5", USD, RoundingPolicy.DOWN))
    assert not testee.is_same_currency_as(Money("5", EUR, HALF_EVEN))
    assert not testee.is_same_currency_as(None)


@pytest.mark.parametrize("other", [USD, "USD", Decimal("1.00")])
def test_is_same_currency_as_rejects_non_money(other):
    with pytest.raises(TypeError, match=r"\$other must be a Money instance"):
        Money("1.00", USD, HALF_EVEN).is_same_currency_as(other)
