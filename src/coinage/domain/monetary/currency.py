from __future__ import annotations

import logging
from enum import Enum

from bidict import bidict

logger = logging.getLogger(__name__)


class CurrencyType(Enum):
    """Enumeration of currency types."""

    FIAT = "FIAT"
    CRYPTO = "CRYPTO"
    COMMODITY = "COMMODITY"


class Currency:
    """Represents a currency with code, precision, symbol and metadata.

    Two currencies are the same currency when both $code and $precision match.
    The $symbol is only used for display.

    Attributes:
        code (str): Currency code (e.g., "USD", "BTC").
        precision (int): Number of fraction digits an amount may carry (0-18).
        name (str): Full currency name.
        currency_type (CurrencyType): Type of currency (FIAT, CRYPTO, COMMODITY).
        symbol (str): Display symbol (e.g., "$"). Defaults to $code.
    """

    # Class-level registry of known currencies, code <-> Currency
    _registry: bidict[str, Currency] = bidict()

    def __init__(
        self,
        code: str,
        precision: int,
        name: str,
        currency_type: CurrencyType = CurrencyType.FIAT,
        symbol: str | None = None,
    ):
        """Initialize a Currency instance.

        Args:
            code (str): Currency code (e.g., "USD", "BTC").
            precision (int): Number of fraction digits (0-18).
            name (str): Full currency name.
            currency_type (CurrencyType): Type of currency.
            symbol (str | None): Display symbol. If None, $code is used.

        Raises:
            ValueError: If parameters are invalid.
            TypeError: If currency_type is not CurrencyType instance.
        """
        # Validate inputs
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0 or precision > 18:
            raise ValueError(f"$precision must be an integer between 0 and 18, but provided value is: {precision}")

        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        if not isinstance(currency_type, CurrencyType):
            raise TypeError(f"$currency_type must be a CurrencyType instance, but provided value is: {currency_type}")

        if symbol is not None and (not isinstance(symbol, str) or not symbol.strip()):
            raise ValueError(f"$symbol must be a non-empty string or None, but provided value is: '{symbol}'")

        self._code = code.upper().strip()
        self._precision = precision
        self._name = name.strip()
        self._currency_type = currency_type
        self._symbol = symbol.strip() if symbol is not None else self._code

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def precision(self) -> int:
        """Get the number of fraction digits allowed for amounts in this currency."""
        return self._precision

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def currency_type(self) -> CurrencyType:
        """Get the currency type."""
        return self._currency_type

    @property
    def symbol(self) -> str:
        """Get the display symbol."""
        return self._symbol

    @classmethod
    def register(cls, currency: Currency, overwrite: bool = False) -> None:
        """Register a currency in the global registry.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to overwrite existing currency.

        Raises:
            ValueError: If currency already exists and overwrite is False.
            TypeError: If currency is not Currency instance.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in cls._registry:
            if not overwrite:
                raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")
            logger.debug(f"Overwriting registered currency '{currency.code}' with {currency!r}")

        cls._registry.forceput(currency.code, currency)

    @classmethod
    def unregister(cls, code: str) -> None:
        """Remove currency with $code from the registry.

        Raises:
            ValueError: If no currency with $code is registered.
        """
        code = code.upper().strip()
        if code not in cls._registry:
            raise ValueError(f"Cannot unregister currency '{code}' because it is not in registry")

        del cls._registry[code]
        logger.debug(f"Unregistered currency '{code}'")

    @classmethod
    def is_registered(cls, currency: Currency) -> bool:
        """Return True if this exact currency (code and precision) is registered."""
        return currency in cls._registry.inverse

    @classmethod
    def registered_codes(cls) -> list[str]:
        """Return codes of all registered currencies, sorted."""
        return sorted(cls._registry.keys())

    @classmethod
    def from_str(cls, code: str) -> Currency:
        """Get currency from registry by code.

        Args:
            code (str): Currency code to look up.

        Returns:
            Currency: The currency instance.

        Raises:
            ValueError: If currency code is not found in registry.
        """
        if not isinstance(code, str):
            raise TypeError(f"$code must be a string, but provided value is: {code}")

        code = code.upper().strip()
        if code not in cls._registry:
            raise ValueError(f"Currency with code '{code}' not found in registry. Available currencies: {cls.registered_codes()}")

        return cls._registry[code]

    @property
    def is_fiat(self) -> bool:
        return self._currency_type == CurrencyType.FIAT

    @property
    def is_crypto(self) -> bool:
        return self._currency_type == CurrencyType.CRYPTO

    @property
    def is_commodity(self) -> bool:
        return self._currency_type == CurrencyType.COMMODITY

    def __reduce__(self):
        # Unpickling goes through `__init__`, so a restored Currency is validated again
        return (Currency, (self._code, self._precision, self._name, self._currency_type, self._symbol))

    def __eq__(self, other) -> bool:
        """Currencies are equal when code and precision match."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code and self.precision == other.precision

    def __hash__(self) -> int:
        return hash((self.code, self.precision))

    def __str__(self) -> str:
        """Return string representation."""
        return self.code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.code}', {self.precision}, '{self.name}', {self.currency_type}, '{self.symbol}')"
