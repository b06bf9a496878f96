from __future__ import annotations

from decimal import Decimal
from typing import TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise, so
    `as_decimal(0.1)` is `Decimal("0.1")` and not the binary expansion.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        TypeError: If $value is a bool or of an unsupported type.
        decimal.InvalidOperation: If $value is a string that is not a number.
    """
    if isinstance(value, Decimal):
        return value

    # bool is an int subclass, but `Decimal(True)` is almost always a bug
    if isinstance(value, bool) or not isinstance(value, (int, str, float)):
        raise TypeError(f"$value must be Decimal, int, str or float, but provided value is: {value!r}")

    if isinstance(value, str):
        return Decimal(value.strip())

    return Decimal(str(value))


def is_integral_factor(value: object) -> bool:
    """Return True when $value is a plain Python int (not a bool)."""
    return isinstance(value, int) and not isinstance(value, bool)
