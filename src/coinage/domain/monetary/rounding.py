from __future__ import annotations

import decimal
from enum import Enum


class RoundingPolicy(Enum):
    """Rule used to drop excess digits when Money is rescaled or divided.

    Members are declared in a fixed order, which `Money.compare_to` relies on.
    """

    UP = "UP"  # Away from zero
    DOWN = "DOWN"  # Towards zero (truncate)
    CEILING = "CEILING"  # Towards positive infinity
    FLOOR = "FLOOR"  # Towards negative infinity
    HALF_UP = "HALF_UP"  # Nearest neighbour, ties away from zero
    HALF_DOWN = "HALF_DOWN"  # Nearest neighbour, ties towards zero
    HALF_EVEN = "HALF_EVEN"  # Nearest neighbour, ties to even (banker's rounding)
    UNNECESSARY = "UNNECESSARY"  # Result must be exact, rounding is an error

    @property
    def decimal_rounding(self) -> str:
        """Matching `decimal.ROUND_*` constant.

        UNNECESSARY maps to ROUND_HALF_EVEN; it is only used together with an
        Inexact trap, so the mode itself never decides a digit.
        """
        return _DECIMAL_ROUNDING[self]

    @property
    def requires_exact(self) -> bool:
        return self is RoundingPolicy.UNNECESSARY

    @property
    def ordinal(self) -> int:
        """Position of this member in declaration order."""
        return _ORDINALS[self]

    @classmethod
    def from_str(cls, name: str) -> RoundingPolicy:
        """Look up policy by name, case-insensitive (e.g. "half_even").

        Raises:
            ValueError: If $name is not a known policy.
        """
        if not isinstance(name, str):
            raise TypeError(f"$name must be a string, but provided value is: {name!r}")

        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError as e:
            raise ValueError(f"Unknown rounding policy '{name}'. Available policies: {[p.name for p in cls]}") from e


_DECIMAL_ROUNDING = {
    RoundingPolicy.UP: decimal.ROUND_UP,
    RoundingPolicy.DOWN: decimal.ROUND_DOWN,
    RoundingPolicy.CEILING: decimal.ROUND_CEILING,
    RoundingPolicy.FLOOR: decimal.ROUND_FLOOR,
    RoundingPolicy.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingPolicy.HALF_DOWN: decimal.ROUND_HALF_DOWN,
    RoundingPolicy.HALF_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingPolicy.UNNECESSARY: decimal.ROUND_HALF_EVEN,
}

_ORDINALS = {policy: index for index, policy in enumerate(RoundingPolicy)}
