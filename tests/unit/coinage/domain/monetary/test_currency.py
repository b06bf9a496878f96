from __future__ import annotations

import pickle

import pytest

from coinage.domain.monetary.currency import Currency, CurrencyType
from coinage.domain.monetary.currency_registry import BTC, EUR, JPY, USD, XAU


@pytest.fixture
def temporary_currency():
    currency = Currency("tst", 4, "Test Coin", CurrencyType.CRYPTO, "T")
    yield currency
    if "TST" in Currency.registered_codes():
        Currency.unregister("TST")


def test_predefined_currencies():
    assert USD.code == "USD"
    assert USD.precision == 2
    assert USD.symbol == "$"
    assert JPY.precision == 0
    assert BTC.is_crypto
    assert XAU.is_commodity
    assert EUR.is_fiat


def test_code_is_normalized_and_symbol_defaults_to_code():
    currency = Currency(" abc ", 2, "Alphabet Dollar")
    assert currency.code == "ABC"
    assert currency.symbol == "ABC"
    assert currency.currency_type is CurrencyType.FIAT


@pytest.mark.parametrize(
    "args",
    [
        ("", 2, "Empty"),
        ("ABC", -1, "Negative"),
        ("ABC", 19, "Too precise"),
        ("ABC", True, "Bool precision"),
        ("ABC", 2, " "),
    ],
)
def test_invalid_arguments(args):
    with pytest.raises(ValueError):
        Currency(*args)


def test_invalid_type_and_symbol():
    with pytest.raises(TypeError):
        Currency("ABC", 2, "Alphabet Dollar", "FIAT")
    with pytest.raises(ValueError, match=r"\$symbol"):
        Currency("ABC", 2, "Alphabet Dollar", CurrencyType.FIAT, "")


def test_equality_uses_code_and_precision():
    assert Currency("USD", 2, "Another name", CurrencyType.FIAT, "US$") == USD
    assert hash(Currency("USD", 2, "Another name")) == hash(USD)
    assert Currency("USD", 4, "US Dollar") != USD
    assert USD != "USD"


def test_str_and_repr():
    assert str(USD) == "USD"
    assert repr(USD) == "Currency('USD', 2, 'US Dollar', CurrencyType.FIAT, '$')"


def test_from_str_finds_registered_currency():
    assert Currency.from_str("usd") is USD
    assert Currency.from_str(" EUR ") is EUR


def test_from_str_unknown_code():
    with pytest.raises(ValueError, match="not found in registry"):
        Currency.from_str("XXX")
    with pytest.raises(TypeError):
        Currency.from_str(840)


def test_register_and_unregister(temporary_currency):
    assert not Currency.is_registered(temporary_currency)

    Currency.register(temporary_currency)

    assert Currency.from_str("TST") is temporary_currency
    assert Currency.is_registered(temporary_currency)
    assert "TST" in Currency.registered_codes()

    Currency.unregister("tst")

    assert not Currency.is_registered(temporary_currency)
    with pytest.raises(ValueError):
        Currency.unregister("TST")


def test_register_duplicate_requires_overwrite(temporary_currency):
    Currency.register(temporary_currency)
    replacement = Currency("TST", 6, "Test Coin v2", CurrencyType.CRYPTO)

    with pytest.raises(ValueError, match="already exists"):
        Currency.register(replacement)

    Currency.register(replacement, overwrite=True)

    assert Currency.from_str("TST") is replacement
    assert not Currency.is_registered(temporary_currency)


def test_register_rejects_non_currency():
    with pytest.raises(TypeError):
        Currency.register("USD")


def test_registered_codes_are_sorted():
    codes = Currency.registered_codes()
    assert codes == sorted(codes)
    assert {"USD", "EUR", "JPY", "BTC"} <= set(codes)


def test_pickled_currency_is_rebuilt_through_init():
    restored = pickle.loads(pickle.dumps(BTC))

    assert restored == BTC
    assert restored.symbol == BTC.symbol
    assert restored.currency_type is CurrencyType.CRYPTO
