__version__ = "0.1.0"

from coinage.domain.monetary.currency import Currency, CurrencyType
from coinage.domain.monetary import currency_registry  # noqa: F401 (registers predefined currencies)
from coinage.domain.monetary.errors import (
    CurrencyMismatchError,
    InvalidMoneyStateError,
    MoneyDivisionByZeroError,
    MoneyDomainError,
    MoneyError,
    RoundingNecessaryError,
    UninitializedDefaultsError,
)
from coinage.domain.monetary.money import Money
from coinage.domain.monetary.money_defaults import MoneyDefaults, get_defaults, init_defaults, reset_defaults
from coinage.domain.monetary.rounding import RoundingPolicy

__all__ = [
    "Currency",
    "CurrencyType",
    "Money",
    "MoneyDefaults",
    "RoundingPolicy",
    "init_defaults",
    "get_defaults",
    "reset_defaults",
    "MoneyError",
    "MoneyDomainError",
    "InvalidMoneyStateError",
    "UninitializedDefaultsError",
    "CurrencyMismatchError",
    "MoneyDivisionByZeroError",
    "RoundingNecessaryError",
]
