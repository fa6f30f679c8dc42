"""vUSD swap engine.

A transfer is priced as two swaps: the source token is swapped into vUSD
on the source pool, then vUSD is swapped into the destination token on the
destination pool. Each swap moves one side of a pool along its invariant
curve and charges the token's commission as a fraction of the nominal
output.

Results may be zero or negative (empty or overdrawn pool); interpreting
that as insufficient liquidity is the caller's job. A pool with a zero
invariant pays nothing out.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from bridgecore.math.invariant import compute_y
from bridgecore.math.precision import from_system_precision, to_system_precision
from bridgecore.models.pool import PoolInfo


class TokenTerms(Protocol):
    """The token attributes the swap engine needs."""

    @property
    def decimals(self) -> int: ...

    @property
    def fee_share(self) -> Decimal: ...


@dataclass(frozen=True)
class SwapResult:
    """Result of simulating one leg of a transfer.

    Attributes:
        amount_in: Amount entering the pool
        amount_out: Amount leaving the pool, net of commission
        commission: Commission charged, in the units of amount_out
    """

    amount_in: int
    amount_out: int
    commission: int


def calculate_commission(amount: int, fee_share: Decimal) -> int:
    """Commission on a nominal output, rounded up.

    Rounding up never overstates the net output.
    """
    if amount <= 0 or fee_share == 0:
        return 0
    numerator, denominator = fee_share.as_integer_ratio()
    return -(-amount * numerator // denominator)


def add_commission(amount: int, fee_share: Decimal) -> int:
    """Smallest nominal output whose net, after commission, covers ``amount``.

    Formula: gross = ceil(amount / (1 - fee_share))
    """
    if fee_share == 0:
        return amount
    numerator, denominator = fee_share.as_integer_ratio()
    return -(-amount * denominator // (denominator - numerator))


def swap_to_vusd(amount: int, token: TokenTerms, pool: PoolInfo) -> SwapResult:
    """Swap a source-token amount into vUSD.

    Args:
        amount: Amount in the source token's precision
        token: Source token terms
        pool: Source pool snapshot

    Returns:
        SwapResult with amount_out and commission in system precision
    """
    if pool.d_value <= 0:
        return SwapResult(amount_in=amount, amount_out=0, commission=0)
    amount_sp = to_system_precision(amount, token.decimals)
    new_vusd_balance = compute_y(pool.a_value, pool.d_value, pool.token_balance + amount_sp)
    vusd_out = pool.vusd_balance - new_vusd_balance
    commission = calculate_commission(vusd_out, token.fee_share)
    return SwapResult(amount_in=amount, amount_out=vusd_out - commission, commission=commission)


def swap_from_vusd(vusd_amount: int, token: TokenTerms, pool: PoolInfo) -> SwapResult:
    """Swap vUSD into the destination token.

    Args:
        vusd_amount: vUSD amount in system precision
        token: Destination token terms
        pool: Destination pool snapshot

    Returns:
        SwapResult with amount_out and commission in the token's precision
    """
    if pool.d_value <= 0:
        return SwapResult(amount_in=vusd_amount, amount_out=0, commission=0)
    new_token_balance = compute_y(pool.a_value, pool.d_value, pool.vusd_balance + vusd_amount)
    amount_out = from_system_precision(pool.token_balance - new_token_balance, token.decimals)
    commission = calculate_commission(amount_out, token.fee_share)
    return SwapResult(
        amount_in=vusd_amount, amount_out=amount_out - commission, commission=commission
    )


def swap_to_vusd_reverse(vusd_amount: int, token: TokenTerms, pool: PoolInfo) -> SwapResult:
    """Source-token amount required to receive ``vusd_amount`` net of commission.

    Inverse of swap_to_vusd: the commission is added back to the desired
    output, the curve is solved for the token balance that removes that
    much vUSD, and the balance delta is converted to token precision.

    Args:
        vusd_amount: Desired net vUSD output in system precision
        token: Source token terms
        pool: Source pool snapshot

    Returns:
        SwapResult with amount_in in the token's precision and commission
        in system precision
    """
    gross_vusd = add_commission(vusd_amount, token.fee_share)
    new_token_balance = compute_y(pool.a_value, pool.d_value, pool.vusd_balance - gross_vusd)
    amount_in = from_system_precision(new_token_balance - pool.token_balance, token.decimals)
    return SwapResult(
        amount_in=amount_in, amount_out=vusd_amount, commission=gross_vusd - vusd_amount
    )


def swap_from_vusd_reverse(amount: int, token: TokenTerms, pool: PoolInfo) -> SwapResult:
    """vUSD amount required to receive ``amount`` destination tokens net of commission.

    Inverse of swap_from_vusd.

    Args:
        amount: Desired net output in the destination token's precision
        token: Destination token terms
        pool: Destination pool snapshot

    Returns:
        SwapResult with amount_in in system precision and commission in the
        token's precision
    """
    gross_amount = add_commission(amount, token.fee_share)
    gross_sp = to_system_precision(gross_amount, token.decimals)
    new_vusd_balance = compute_y(pool.a_value, pool.d_value, pool.token_balance - gross_sp)
    return SwapResult(
        amount_in=new_vusd_balance - pool.vusd_balance,
        amount_out=amount,
        commission=gross_amount - amount,
    )
