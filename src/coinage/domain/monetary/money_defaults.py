from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from coinage.domain.monetary.currency import Currency
from coinage.domain.monetary.errors import UninitializedDefaultsError
from coinage.domain.monetary.rounding import RoundingPolicy
from coinage.utils.numeric_tools import DecimalLike

if TYPE_CHECKING:
    from coinage.domain.monetary.money import Money

logger = logging.getLogger(__name__)

ENV_DEFAULT_CURRENCY = "COINAGE_DEFAULT_CURRENCY"
ENV_DEFAULT_ROUNDING = "COINAGE_DEFAULT_ROUNDING"


@dataclass(frozen=True)
class MoneyDefaults:
    """Default currency and rounding policy used when a Money omits them.

    Pass an instance around explicitly and build Money through `money`, or install
    one process-wide with `init_defaults` at startup.

    Attributes:
        currency: Currency used when none is given.
        rounding: Rounding policy used when none is given.
    """

    currency: Currency
    rounding: RoundingPolicy = RoundingPolicy.HALF_EVEN

    def __post_init__(self):
        if not isinstance(self.currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {self.currency}")
        if not isinstance(self.rounding, RoundingPolicy):
            raise TypeError(f"$rounding must be a RoundingPolicy instance, but provided value is: {self.rounding}")

    def money(self, amount: DecimalLike, currency: Currency | None = None) -> Money:
        """Create Money with $amount, using these defaults for missing parts.

        Args:
            amount: Amount of money.
            currency: Currency to use instead of the default one.

        Returns:
            Money: New instance with $rounding of these defaults.
        """
        from coinage.domain.monetary.money import Money

        return Money(amount, currency if currency is not None else self.currency, self.rounding)

    @classmethod
    def from_env(cls, dotenv_path: str | os.PathLike | None = None) -> MoneyDefaults:
        """Read defaults from environment variables, loading a `.env` file first.

        Variables:
            COINAGE_DEFAULT_CURRENCY: registered currency code (required).
            COINAGE_DEFAULT_ROUNDING: rounding policy name (optional, HALF_EVEN).

        Args:
            dotenv_path: Path of the `.env` file. If None, `.env` is searched for
                from the current working directory upwards.

        Returns:
            MoneyDefaults: Defaults described by the environment.

        Raises:
            UninitializedDefaultsError: If the currency variable is missing.
            ValueError: If the currency code or rounding name is unknown.
        """
        load_dotenv(dotenv_path)

        currency_code = os.environ.get(ENV_DEFAULT_CURRENCY)
        if not currency_code:
            raise UninitializedDefaultsError(f"Cannot read Money defaults because environment variable ${ENV_DEFAULT_CURRENCY} is not set")

        rounding_name = os.environ.get(ENV_DEFAULT_ROUNDING) or RoundingPolicy.HALF_EVEN.name
        return cls(Currency.from_str(currency_code), RoundingPolicy.from_str(rounding_name))


# Process-wide defaults, set once at startup by `init_defaults`
_defaults: MoneyDefaults | None = None


def init_defaults(currency: Currency, rounding: RoundingPolicy = RoundingPolicy.HALF_EVEN) -> MoneyDefaults:
    """Set process-wide default currency and rounding policy.

    Call this once at startup, before any Money is created without an explicit
    currency or rounding. Calling it again replaces the previous defaults.

    Args:
        currency: Default currency.
        rounding: Default rounding policy. HALF_EVEN (banker's rounding) introduces
            the least bias and is the recommended choice.

    Returns:
        MoneyDefaults: The installed defaults.
    """
    global _defaults

    new_defaults = MoneyDefaults(currency, rounding)
    if _defaults is not None and _defaults != new_defaults:
        logger.warning(f"Overwriting Money defaults {_defaults} with {new_defaults}")
    else:
        logger.info(f"Money defaults set to currency {currency} and rounding {rounding.name}")

    _defaults = new_defaults
    return new_defaults


def get_defaults() -> MoneyDefaults:
    """Return the process-wide defaults.

    Raises:
        UninitializedDefaultsError: If `init_defaults` was never called.
    """
    if _defaults is None:
        raise UninitializedDefaultsError("Money defaults are not initialized. Call `init_defaults` at startup.")
    return _defaults


def reset_defaults() -> None:
    """Forget process-wide defaults (mainly for tests)."""
    global _defaults
    _defaults = None
    logger.debug("Money defaults were reset")
