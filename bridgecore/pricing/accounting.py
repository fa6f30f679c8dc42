"""Liquidity pool accounting.

Deposits are valued by the growth of the pool invariant they cause;
withdrawals burn LP 1:1 against the token in system precision.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from bridgecore.math.invariant import compute_d
from bridgecore.math.precision import DECIMAL_CONTEXT
from bridgecore.models.pool import PoolInfo


def deposit_amount_to_vusd(
    amount: int,
    a: int,
    d: int,
    token_balance: int,
    vusd_balance: int,
) -> int:
    """LP value (vUSD, system precision) created by depositing ``amount``.

    The deposit is spread over both sides of the pool in proportion to
    their current balances (split equally into an empty pool), then the
    new invariant is computed. The LP value created is the growth of D.

    Args:
        amount: Deposit in system precision
        a: Amplification coefficient
        d: Current invariant
        token_balance: Current token-side balance
        vusd_balance: Current vUSD-side balance

    Returns:
        New D minus current D
    """
    old_balance = token_balance + vusd_balance
    if old_balance == 0:
        half = amount // 2
        new_token_balance = token_balance + half
        new_vusd_balance = vusd_balance + half
    else:
        new_token_balance = token_balance + amount * token_balance // old_balance
        new_vusd_balance = vusd_balance + amount * vusd_balance // old_balance

    return compute_d(a, new_token_balance, new_vusd_balance) - d


def vusd_to_withdrawal_amount(amount: int) -> int:
    """Token amount (system precision) paid out for burning ``amount`` LP.

    Accrued rewards are paid on top of this.
    """
    return amount


def calculate_pool_info_imbalance(pool: PoolInfo) -> Decimal:
    """Signed divergence of the two pool sides, in [-1, 1].

    (token_balance - vusd_balance) / (token_balance + vusd_balance);
    positive when the pool holds more token than vUSD. Diagnostic only.
    """
    total = pool.token_balance + pool.vusd_balance
    if total == 0:
        return Decimal(0)
    return DECIMAL_CONTEXT.divide(Decimal(pool.token_balance - pool.vusd_balance), Decimal(total))


def apr_in_percents(apr: Decimal | str | int) -> str:
    """Render an APR fraction as a percentage, e.g. 0.1234 -> '12.34%'."""
    percent = Decimal(apr) * 100
    if percent <= 0:
        return "0%"
    return f"{percent.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}%"
