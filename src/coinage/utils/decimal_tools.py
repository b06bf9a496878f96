from __future__ import annotations

from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Overflow,
    ROUND_05UP,
    ROUND_HALF_EVEN,
    localcontext,
)

# Digits kept beyond the target scale when dividing. Together with ROUND_05UP this
# makes the final rounding behave as if the quotient was computed exactly.
_GUARD_DIGITS = 3

_DEFAULT_TRAPS = [InvalidOperation, DivisionByZero, Overflow]


def _unbounded_context(rounding: str = ROUND_HALF_EVEN, exact: bool = False) -> Context:
    """Context with unlimited precision. Never use it for division."""
    traps = _DEFAULT_TRAPS + [Inexact] if exact else list(_DEFAULT_TRAPS)
    return Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=rounding, traps=traps)


def scale_of(value: Decimal) -> int:
    """Return number of digits right of the decimal point.

    Negative for values like `Decimal("12E+3")` (scale -3).

    Args:
        value: Finite decimal value.

    Returns:
        Scale of $value.
    """
    return -value.as_tuple().exponent


def quantum_for_scale(scale: int) -> Decimal:
    """Return `Decimal` whose exponent equals -$scale (e.g. 2 -> 0.01, -3 -> 1E+3)."""
    return Decimal((0, (1,), -scale))


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(_unbounded_context(exact=True)):
        return a + b


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(_unbounded_context(exact=True)):
        return a - b


def exact_multiply(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(_unbounded_context(exact=True)):
        return a * b


def quantize_to_scale(value: Decimal, scale: int, rounding: str, exact: bool = False) -> Decimal:
    """Rescale $value to $scale using $rounding.

    Args:
        value: Finite decimal value.
        scale: Target number of fractional digits (may be negative).
        rounding: One of the `decimal.ROUND_*` constants.
        exact: When True, raise instead of dropping any non-zero digit.

    Returns:
        Value with exponent -$scale.

    Raises:
        decimal.Inexact: If $exact is True and rescaling would lose digits.
    """
    with localcontext(_unbounded_context(rounding, exact)):
        return value.quantize(quantum_for_scale(scale))


def divide_to_scale(dividend: Decimal, divisor: Decimal, scale: int, rounding: str, exact: bool = False) -> Decimal:
    """Divide and round the quotient once, directly to $scale.

    The quotient is first computed with a few guard digits using ROUND_05UP, which keeps
    enough information about discarded digits for the final rounding step to be correct
    in every rounding mode, even when the exact quotient does not terminate.

    Args:
        dividend: Finite decimal value.
        divisor: Finite decimal value.
        scale: Number of fractional digits of the result.
        rounding: One of the `decimal.ROUND_*` constants.
        exact: When True, raise if the quotient cannot be represented at $scale.

    Returns:
        Quotient with exponent -$scale.

    Raises:
        decimal.DivisionByZero: If $divisor is zero.
        decimal.Inexact: If $exact is True and the quotient needs rounding.
    """
    if divisor.is_zero():
        raise DivisionByZero(f"Cannot divide {dividend} by zero")

    if dividend.is_zero():
        return quantize_to_scale(dividend.copy_abs(), scale, rounding)

    # |quotient| < 10 ** (dividend.adjusted() - divisor.adjusted() + 1)
    integer_digits = dividend.adjusted() - divisor.adjusted() + 1
    precision = max(integer_digits + scale, 0) + _GUARD_DIGITS

    context = Context(prec=precision, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_05UP, traps=list(_DEFAULT_TRAPS))
    with localcontext(context):
        quotient = dividend / divisor

    return quantize_to_scale(quotient, scale, rounding, exact=exact)
