"""Errors raised by the monetary domain.

Two families exist:

* `InvalidMoneyStateError` and `UninitializedDefaultsError` signal that a Money
  could not be built at all (bad input, tampered snapshot, missing startup
  configuration). These usually mean a bug or corrupted data.
* `MoneyDomainError` subclasses are expected outcomes of ordinary arithmetic
  (mixing currencies, dividing by zero, a rounding that is not allowed) and are
  meant to be caught and handled by callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coinage.domain.monetary.currency import Currency


class MoneyError(Exception):
    """Base class of all monetary errors."""


class InvalidMoneyStateError(MoneyError, ValueError):
    """Money fields violate an invariant (missing field, too many decimals, ...)."""


class UninitializedDefaultsError(MoneyError, RuntimeError):
    """Default currency / rounding were required but `init_defaults` was never called."""


class MoneyDomainError(MoneyError):
    """Recoverable error coming from an operation on valid Money objects."""


class CurrencyMismatchError(MoneyDomainError, ValueError):
    """Two Money objects with different currencies were combined or compared.

    Attributes:
        expected: Currency of the left operand.
        actual: Currency of the right operand.
    """

    def __init__(self, expected: Currency, actual: Currency):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Currency {actual} doesn't match the expected currency {expected}")

    def __reduce__(self):
        return self.__class__, (self.expected, self.actual)


class MoneyDivisionByZeroError(MoneyDomainError, ZeroDivisionError):
    """Money was divided by zero."""


class RoundingNecessaryError(MoneyDomainError, ArithmeticError):
    """Rounding policy UNNECESSARY was used, but the result needs rounding."""
