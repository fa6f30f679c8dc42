"""Exact integer math for the pricing engine.

- precision: token decimals <-> system precision conversions
- invariant: StableSwap invariant and balance solvers
"""

from bridgecore.math.invariant import compute_d, compute_y
from bridgecore.math.precision import (
    DECIMAL_CONTEXT,
    convert_float_amount_to_int,
    convert_int_amount_to_float,
    format_amount,
    from_system_precision,
    to_system_precision,
    validate_amount_decimals,
)

__all__ = [
    "compute_d",
    "compute_y",
    "DECIMAL_CONTEXT",
    "to_system_precision",
    "from_system_precision",
    "convert_float_amount_to_int",
    "convert_int_amount_to_float",
    "format_amount",
    "validate_amount_decimals",
]
