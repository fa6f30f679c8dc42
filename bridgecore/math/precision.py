"""Precision conversion between token decimals and system precision.

Amounts are plain Python ints. Conversions that reduce precision truncate
(floor division), so a converted amount never overstates value. Decimal
amounts supplied by users are parsed exactly; binary floats are routed
through ``str`` and never used in arithmetic.
"""

from __future__ import annotations

import decimal
from decimal import Decimal, InvalidOperation

from bridgecore.constants import SYSTEM_PRECISION
from bridgecore.errors import ValidationError

# 78 digits of precision: enough for uint256 values (up to ~10^77)
DECIMAL_CONTEXT = decimal.Context(prec=78)

AmountLike = int | str | Decimal | float


def to_system_precision(amount: int, decimals: int) -> int:
    """Scale an amount from token precision to system precision.

    Args:
        amount: Amount in the token's native decimals
        decimals: The token's decimals

    Returns:
        Amount in system precision, truncated when decimals > SYSTEM_PRECISION
    """
    if decimals > SYSTEM_PRECISION:
        return amount // 10 ** (decimals - SYSTEM_PRECISION)
    return amount * 10 ** (SYSTEM_PRECISION - decimals)


def from_system_precision(amount: int, decimals: int) -> int:
    """Scale an amount from system precision to token precision.

    Args:
        amount: Amount in system precision
        decimals: The token's decimals

    Returns:
        Amount in token precision, truncated when decimals < SYSTEM_PRECISION
    """
    if decimals > SYSTEM_PRECISION:
        return amount * 10 ** (decimals - SYSTEM_PRECISION)
    return amount // 10 ** (SYSTEM_PRECISION - decimals)


def _to_decimal(amount: AmountLike, name: str) -> Decimal:
    if isinstance(amount, bool):
        raise ValidationError(f"{name} must be a number, got bool")
    if isinstance(amount, float):
        amount = str(amount)
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as err:
        raise ValidationError(f"{name} is not a valid number: {amount!r}") from err
    if not value.is_finite():
        raise ValidationError(f"{name} must be finite, got {amount!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {amount!r}")
    return value


def _fractional_digits(value: Decimal) -> int:
    """Number of significant digits after the decimal point."""
    _, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int) or exponent >= 0:
        return 0
    significant = "".join(map(str, digits)).rstrip("0")
    trailing_zeros = len(digits) - len(significant)
    return max(0, -exponent - trailing_zeros)


def validate_amount_decimals(name: str, amount: AmountLike, decimals: int) -> Decimal:
    """Parse an amount and check it fits the given number of decimals.

    Returns:
        The parsed amount

    Raises:
        ValidationError: If the amount is malformed, negative, or has more
            fractional digits than ``decimals``
    """
    value = _to_decimal(amount, name)
    fractional = _fractional_digits(value)
    if fractional > decimals:
        raise ValidationError(
            f"{name} has {fractional} fractional digits, more than the {decimals} decimals allowed"
        )
    return value


def convert_float_amount_to_int(amount: AmountLike, decimals: int) -> int:
    """Convert a decimal amount (e.g. "1.5") to an integer in ``decimals``.

    Raises:
        ValidationError: If the amount has more fractional digits than ``decimals``
    """
    value = validate_amount_decimals("amount", amount, decimals)
    _, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int):
        raise ValidationError(f"amount must be finite, got {amount!r}")
    coefficient = int("".join(map(str, digits)) or "0")
    shift = exponent + decimals
    if shift >= 0:
        return coefficient * 10**shift
    # Exact: validation guarantees the dropped digits are zeros
    return coefficient // 10**-shift


def convert_int_amount_to_float(amount: int, decimals: int) -> Decimal:
    """Convert an integer amount in ``decimals`` to its exact decimal value."""
    return Decimal(amount).scaleb(-decimals, context=DECIMAL_CONTEXT).normalize(DECIMAL_CONTEXT)


def format_amount(value: Decimal) -> str:
    """Render a decimal amount without exponent or trailing zeros."""
    normalized = value.normalize(DECIMAL_CONTEXT)
    return f"{normalized:f}"
