from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal, Inexact, InvalidOperation
from typing import Any

from coinage.domain.monetary.currency import Currency
from coinage.domain.monetary.errors import (
    CurrencyMismatchError,
    InvalidMoneyStateError,
    MoneyDivisionByZeroError,
    RoundingNecessaryError,
)
from coinage.domain.monetary.money_defaults import get_defaults
from coinage.domain.monetary.rounding import RoundingPolicy
from coinage.utils.decimal_tools import (
    divide_to_scale,
    exact_add,
    exact_multiply,
    exact_subtract,
    quantize_to_scale,
    scale_of,
)
from coinage.utils.numeric_tools import DecimalLike, as_decimal, is_integral_factor

logger = logging.getLogger(__name__)

# Marks constructor arguments that were not passed at all (as opposed to an explicit None)
_UNSET: Any = object()

_HASH_SEED = 23
_HASH_FACTOR = 37


class Money:
    """Immutable amount of money in one currency, with a rounding policy.

    The amount is a `Decimal` whose number of fraction digits never exceeds
    `currency.precision`. A negative scale is fine, so `Money(Decimal("12E+3"), USD)`
    represents twelve thousand dollars.

    Two kinds of equality exist:

    * `==` is sensitive to scale: `Money("10", USD) != Money("10.00", USD)`.
    * `eq` compares numeric value only, and requires the same currency.

    Ordering operators (`<`, `sorted`, ...) use `compare_to`, a total order over
    amount, currency code and rounding policy, so mixed currencies can be sorted.
    Use `lt`, `gt`, ... for currency-checked comparison.

    Examples:
        >>> Money("10.00", USD, RoundingPolicy.HALF_EVEN).div(3)
        Money(3.33, USD, HALF_EVEN)
    """

    __slots__ = ("_amount", "_currency", "_rounding", "_hash")

    # region Init

    def __init__(self, amount: DecimalLike, currency: Currency = _UNSET, rounding: RoundingPolicy = _UNSET):
        """Create Money.

        Args:
            amount: Amount of money. Its number of fraction digits must not exceed
                $currency.precision.
            currency: Currency of $amount. If omitted, the default currency is used.
            rounding: Rounding policy used by `times` and `div`. If omitted, the
                default rounding policy is used.

        Raises:
            InvalidMoneyStateError: If $amount or $currency or $rounding is None, if
                $amount is not a finite number, or if it has too many fraction digits.
            UninitializedDefaultsError: If an argument was omitted and defaults were
                never initialized.
            TypeError: If $currency or $rounding has a wrong type.
        """
        if currency is _UNSET or rounding is _UNSET:
            defaults = get_defaults()
            if currency is _UNSET:
                currency = defaults.currency
            if rounding is _UNSET:
                rounding = defaults.rounding

        if amount is None:
            raise InvalidMoneyStateError("Amount cannot be None")

        try:
            decimal_amount = as_decimal(amount)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise InvalidMoneyStateError(f"Cannot init `Money` because $amount ({amount!r}) cannot be converted to Decimal") from e

        self._assign(decimal_amount, currency, rounding)

    def _assign(self, amount: Decimal, currency: Currency, rounding: RoundingPolicy) -> None:
        self._validate_state(amount, currency, rounding)

        # Decimal has a negative zero, but a signed zero amount carries no meaning
        if amount.is_zero() and amount.is_signed():
            amount = amount.copy_abs()

        object.__setattr__(self, "_amount", amount)
        object.__setattr__(self, "_currency", currency)
        object.__setattr__(self, "_rounding", rounding)
        object.__setattr__(self, "_hash", self._compute_hash())

    @staticmethod
    def _validate_state(amount: Decimal, currency: Currency, rounding: RoundingPolicy) -> None:
        # Raise: all fields must be present
        if amount is None:
            raise InvalidMoneyStateError("Amount cannot be None")
        if currency is None:
            raise InvalidMoneyStateError("Currency cannot be None")
        if rounding is None:
            raise InvalidMoneyStateError("Rounding policy cannot be None")

        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")
        if not isinstance(rounding, RoundingPolicy):
            raise TypeError(f"$rounding must be a RoundingPolicy instance, but provided value is: {rounding!r}")

        # Raise: amount must be a real number
        if not isinstance(amount, Decimal) or not amount.is_finite():
            raise InvalidMoneyStateError(f"Amount must be a finite Decimal, but provided value is: {amount!r}")

        # Raise: amount cannot carry more decimals than the currency allows
        if scale_of(amount) > currency.precision:
            raise InvalidMoneyStateError(
                f"Number of decimals is {scale_of(amount)}, but currency {currency.code} only takes {currency.precision} decimals.",
            )

    def _compute_hash(self) -> int:
        result = _HASH_SEED
        result = _HASH_FACTOR * result + hash(self._amount)
        result = _HASH_FACTOR * result + hash(self._currency)
        result = _HASH_FACTOR * result + hash(self._rounding)
        return result

    # endregion

    # region Properties

    @property
    def amount(self) -> Decimal:
        """Get the amount, exactly as passed to the constructor."""
        return self._amount

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def rounding(self) -> RoundingPolicy:
        return self._rounding

    @property
    def scale(self) -> int:
        """Number of fraction digits of $amount (negative for multiples of 10)."""
        return scale_of(self._amount)

    # endregion

    # region Predicates

    def is_positive(self) -> bool:
        return self._amount > 0

    def is_negative(self) -> bool:
        return self._amount < 0

    def is_zero(self) -> bool:
        return self._amount == 0

    def is_same_currency_as(self, other: Money | None) -> bool:
        """Return True only if $other is a Money with the same currency as this one."""
        if other is None:
            return False
        if not isinstance(other, Money):
            raise TypeError(f"$other must be a Money instance, but provided value is: {other!r}")
        return self._currency == other.currency

    # endregion

    # region Arithmetic

    def plus(self, other: Money) -> Money:
        """Add $other to this Money. Currencies must match.

        The result keeps currency and rounding of this Money. No rounding happens.
        """
        self._check_currencies_match(other)
        return self._with_amount(exact_add(self._amount, other.amount))

    def minus(self, other: Money) -> Money:
        """Subtract $other from this Money. Currencies must match."""
        self._check_currencies_match(other)
        return self._with_amount(exact_subtract(self._amount, other.amount))

    def times(self, factor: DecimalLike) -> Money:
        """Multiply this Money by $factor.

        An `int` factor gives an exact result with the same scale as this Money.
        Any other factor (`float`, `Decimal`, `str`) may produce more decimals than
        the currency allows, so the product is rescaled to $currency.precision
        using $rounding.

        Raises:
            RoundingNecessaryError: If $rounding is UNNECESSARY and the product
                does not fit the currency precision.
        """
        if is_integral_factor(factor):
            return self._with_amount(exact_multiply(self._amount, Decimal(factor)))

        decimal_factor = self._to_operand(factor, "factor")
        product = exact_multiply(self._amount, decimal_factor)
        return self._with_amount(self._rescale(product, self._currency.precision))

    def div(self, divisor: DecimalLike) -> Money:
        """Divide this Money by $divisor.

        The quotient is rounded with $rounding to the scale of this Money, so
        `Money("10.00", USD).div(3)` is `3.33` and `Money("10", USD).div(3)` is `3`.

        Raises:
            MoneyDivisionByZeroError: If $divisor is zero.
            RoundingNecessaryError: If $rounding is UNNECESSARY and the quotient
                needs rounding.
        """
        if is_integral_factor(divisor):
            decimal_divisor = Decimal(divisor)
        else:
            decimal_divisor = self._to_operand(divisor, "divisor")

        # Raise: division by zero is undefined
        if decimal_divisor.is_zero():
            raise MoneyDivisionByZeroError(f"Cannot divide {self!r} by zero")

        try:
            quotient = divide_to_scale(
                self._amount,
                decimal_divisor,
                self.scale,
                self._rounding.decimal_rounding,
                exact=self._rounding.requires_exact,
            )
        except Inexact as e:
            raise RoundingNecessaryError(f"Dividing {self!r} by {decimal_divisor} needs rounding, but rounding policy is {self._rounding.name}") from e

        return self._with_amount(quotient)

    def abs(self) -> Money:
        """Return absolute value of this Money."""
        return self if not self.is_negative() else self.times(-1)

    def negate(self) -> Money:
        """Return this Money multiplied by -1."""
        return self.times(-1)

    @classmethod
    def sum(cls, moneys: Iterable[Money], currency_if_empty: Currency, rounding: RoundingPolicy | None = None) -> Money:
        """Sum Money objects that all share one currency.

        Args:
            moneys: Money objects to add up.
            currency_if_empty: Currency of the starting zero. It is the result's
                currency when $moneys is empty, and every item must match it.
            rounding: Rounding policy of the result. If None, the default rounding
                policy is used.

        Returns:
            Money: Total amount.

        Raises:
            CurrencyMismatchError: On the first item whose currency differs.
        """
        if rounding is None:
            rounding = get_defaults().rounding

        total = cls(Decimal(0), currency_if_empty, rounding)
        for money in moneys:
            total = total.plus(money)
        return total

    # endregion

    # region Comparison

    def eq(self, other: Money) -> bool:
        """Equal amounts, ignoring scale (`10` eq `10.00`). Currencies must match."""
        self._check_currencies_match(other)
        return self._amount == other.amount

    def gt(self, other: Money) -> bool:
        self._check_currencies_match(other)
        return self._amount > other.amount

    def gteq(self, other: Money) -> bool:
        self._check_currencies_match(other)
        return self._amount >= other.amount

    def lt(self, other: Money) -> bool:
        self._check_currencies_match(other)
        return self._amount < other.amount

    def lteq(self, other: Money) -> bool:
        self._check_currencies_match(other)
        return self._amount <= other.amount

    def compare_to(self, other: Money) -> int:
        """Total order: amount (numeric), then currency code, then rounding policy.

        Never raises for different currencies, so it is safe for sorting.

        Returns:
            int: -1, 0 or 1.
        """
        if not isinstance(other, Money):
            raise TypeError(f"$other must be a Money instance, but provided value is: {other!r}")

        if self is other:
            return 0

        keys = (self._amount, self._currency.code, self._rounding.ordinal)
        other_keys = (other.amount, other.currency.code, other.rounding.ordinal)
        for mine, theirs in zip(keys, other_keys):
            if mine < theirs:
                return -1
            if mine > theirs:
                return 1
        return 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) >= 0

    # endregion

    # region Identity

    def equals(self, other: object) -> bool:
        """Scale-sensitive equality, same as `==`."""
        return self == other

    def __eq__(self, other) -> bool:
        """Equal only if amount (including scale), currency and rounding all match."""
        if self is other:
            return True
        if not isinstance(other, Money):
            return NotImplemented
        return (
            self._amount == other.amount
            and self.scale == other.scale
            and self._currency == other.currency
            and self._rounding is other.rounding
        )

    def __hash__(self) -> int:
        return self._hash

    def __setattr__(self, name, value):
        raise AttributeError(f"Cannot set attribute '{name}' because `Money` is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"Cannot delete attribute '{name}' because `Money` is immutable")

    # endregion

    # region Operators

    def __add__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, other):
        if isinstance(other, Money):
            return NotImplemented  # Money * Money doesn't make sense
        try:
            return self.times(other)
        except TypeError:
            return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, Money):
            return NotImplemented
        try:
            return self.div(other)
        except TypeError:
            return NotImplemented

    def __neg__(self) -> Money:
        return self.negate()

    def __pos__(self) -> Money:
        return self

    def __abs__(self) -> Money:
        return self.abs()

    # endregion

    # region Serialization

    def __getstate__(self) -> dict[str, Any]:
        # Hash is derived from the fields and is recomputed on restore
        return {"amount": self._amount, "currency": self._currency, "rounding": self._rounding}

    def __setstate__(self, state: dict[str, Any]) -> None:
        """Restore from a snapshot, treating it like untrusted constructor input.

        Raises:
            AttributeError: If this instance was already initialized.
            InvalidMoneyStateError: If the snapshot is malformed or violates an invariant.
        """
        # Only a blank instance made by `__new__` may be restored into
        if hasattr(self, "_amount"):
            raise AttributeError("Cannot restore state into an existing instance because `Money` is immutable")

        try:
            if not isinstance(state, dict):
                raise InvalidMoneyStateError(f"Money snapshot must be a dict, but provided value is: {type(state).__name__}")

            amount = state.get("amount")
            if not isinstance(amount, (Decimal, str)):
                raise InvalidMoneyStateError(f"Money snapshot $amount must be Decimal or str, but provided value is: {amount!r}")

            # Rebuild amount from its canonical string, so nothing but the value itself survives
            try:
                amount = Decimal(str(amount))
            except InvalidOperation as e:
                raise InvalidMoneyStateError(f"Money snapshot $amount ({amount!r}) is not a number") from e

            self._assign(amount, state.get("currency"), state.get("rounding"))
        except InvalidMoneyStateError as e:
            logger.debug(f"Rejected Money snapshot {state!r}: {e}")
            raise
        except TypeError as e:
            logger.debug(f"Rejected Money snapshot {state!r}: {e}")
            raise InvalidMoneyStateError(f"Money snapshot has fields of wrong type: {e}") from e

    def __copy__(self) -> Money:
        return self

    def __deepcopy__(self, memo) -> Money:
        return self

    def to_dict(self) -> dict[str, str]:
        """Return JSON-friendly snapshot, e.g. `{"amount": "10.00", "currency": "USD", "rounding": "HALF_EVEN"}`."""
        return {"amount": str(self._amount), "currency": self._currency.code, "rounding": self._rounding.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Money:
        """Restore Money from a snapshot created by `to_dict`.

        The currency is looked up in the currency registry by its code.

        Raises:
            InvalidMoneyStateError: If the snapshot is malformed, names an unknown
                currency or rounding policy, or violates an invariant.
        """
        if not isinstance(data, dict):
            raise InvalidMoneyStateError(f"Money snapshot must be a dict, but provided value is: {type(data).__name__}")

        try:
            currency = Currency.from_str(data["currency"])
            rounding = RoundingPolicy.from_str(data["rounding"])
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidMoneyStateError(f"Cannot restore Money from snapshot {data!r}: {e}") from e

        result = cls.__new__(cls)
        result.__setstate__({"amount": data.get("amount"), "currency": currency, "rounding": rounding})
        return result

    # endregion

    # region Helpers

    def _with_amount(self, amount: Decimal) -> Money:
        return self.__class__(amount, self._currency, self._rounding)

    def _check_currencies_match(self, other: Money) -> None:
        """Raise CurrencyMismatchError if $other has different currency.

        Raises:
            TypeError: If $other is not Money.
            CurrencyMismatchError: If currencies don't match.
        """
        if not isinstance(other, Money):
            raise TypeError(f"$other must be a Money instance, but provided value is: {other!r}")
        if self._currency != other.currency:
            raise CurrencyMismatchError(self._currency, other.currency)

    def _to_operand(self, value: DecimalLike, name: str) -> Decimal:
        try:
            result = as_decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"${name} ({value!r}) cannot be converted to Decimal") from e

        if not result.is_finite():
            raise ValueError(f"${name} must be a finite number, but provided value is: {value!r}")
        return result

    def _rescale(self, value: Decimal, scale: int) -> Decimal:
        try:
            return quantize_to_scale(value, scale, self._rounding.decimal_rounding, exact=self._rounding.requires_exact)
        except Inexact as e:
            raise RoundingNecessaryError(f"Rescaling {value} to {scale} decimals needs rounding, but rounding policy is {self._rounding.name}") from e

    # endregion

    # region String

    def __str__(self) -> str:
        """Return plain amount and currency symbol, e.g. '10.00 $'."""
        return f"{self._amount:f} {self._currency.symbol}"

    def __repr__(self) -> str:
        """Return string like 'Money(10.00, USD, HALF_EVEN)'."""
        return f"{self.__class__.__name__}({self._amount}, {self._currency.code}, {self._rounding.name})"

    # endregion
