"""Fee percentages and swap-and-bridge breakdowns.

Fee percentages are fractions in [0, 1). The destination-chain fee is
measured on the amount left after the source-chain fee, so the two legs
compound rather than add.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import structlog

from bridgecore.errors import InsufficientPoolLiquidity
from bridgecore.math.precision import DECIMAL_CONTEXT, from_system_precision
from bridgecore.models.pool import PoolInfo
from bridgecore.pricing.swap import (
    TokenTerms,
    swap_from_vusd,
    swap_from_vusd_reverse,
    swap_to_vusd,
    swap_to_vusd_reverse,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapPoolInfo:
    """Token terms bundled with the pool snapshot they are priced against."""

    decimals: int
    fee_share: Decimal
    pool_info: PoolInfo


@dataclass(frozen=True)
class SwapAndBridgeCalculationData:
    """Breakdown of a full transfer through both pools.

    Attributes:
        amount_sent: Source token amount (source precision)
        vusd_amount: vUSD carried between the pools (system precision)
        amount_received: Destination token amount (destination precision)
        source_commission: Commission on the source leg (system precision)
        destination_commission: Commission on the destination leg
            (destination precision)
    """

    amount_sent: int
    vusd_amount: int
    amount_received: int
    source_commission: int
    destination_commission: int


def get_fee_percent(amount_in: int, amount_out: int) -> Decimal:
    """Fraction of ``amount_in`` lost on the way to ``amount_out``.

    Returns 0 when amount_in is 0, and when the output exceeds the input
    (an imbalanced pool can pay a bonus).
    """
    if amount_in == 0:
        return Decimal(0)
    fee = DECIMAL_CONTEXT.divide(Decimal(amount_in - amount_out), Decimal(amount_in))
    return max(fee, Decimal(0))


def ensure_pool_liquidity(pool: PoolInfo) -> None:
    """Refuse to price through a pool with an empty side or a zero invariant.

    Raises:
        InsufficientPoolLiquidity: If either balance or D is zero
    """
    if pool.token_balance <= 0 or pool.vusd_balance <= 0 or pool.d_value <= 0:
        logger.warning(
            "empty_pool",
            token_balance=pool.token_balance,
            vusd_balance=pool.vusd_balance,
            d_value=pool.d_value,
        )
        raise InsufficientPoolLiquidity(
            f"Pool has an empty side (token={pool.token_balance}, vUSD={pool.vusd_balance}, "
            f"D={pool.d_value})"
        )


def _ensure_positive_output(leg: str, amount: int, output: int) -> None:
    if output <= 0:
        logger.info("insufficient_pool_liquidity", leg=leg, amount=amount, result=output)
        raise InsufficientPoolLiquidity()


def fee_percent_on_source_chain(amount: int, token: TokenTerms, pool: PoolInfo) -> Decimal:
    """Fee fraction charged by the source leg for ``amount`` (source precision).

    Raises:
        InsufficientPoolLiquidity: If the leg produces nothing in source precision
    """
    if amount == 0:
        return Decimal(0)
    vusd = swap_to_vusd(amount, token, pool).amount_out
    vusd_in_source_precision = from_system_precision(vusd, token.decimals)
    _ensure_positive_output("source", amount, vusd_in_source_precision)
    return get_fee_percent(amount, vusd_in_source_precision)


def fee_percent_on_destination_chain(
    amount: int,
    source_token: TokenTerms,
    source_pool: PoolInfo,
    destination_token: TokenTerms,
    destination_pool: PoolInfo,
) -> Decimal:
    """Fee fraction charged by the destination leg.

    Measured against the vUSD produced by the source leg, i.e. after the
    source-chain fee has been taken.

    Raises:
        InsufficientPoolLiquidity: If either leg produces nothing
    """
    if amount == 0:
        return Decimal(0)
    vusd = swap_to_vusd(amount, source_token, source_pool).amount_out
    _ensure_positive_output("source", amount, vusd)
    received = swap_from_vusd(vusd, destination_token, destination_pool).amount_out
    _ensure_positive_output("destination", vusd, received)
    vusd_in_destination_precision = from_system_precision(vusd, destination_token.decimals)
    return get_fee_percent(vusd_in_destination_precision, received)


def swap_and_bridge_fee_calculation(
    amount: int,
    source: SwapPoolInfo,
    destination: SwapPoolInfo,
) -> SwapAndBridgeCalculationData:
    """Forward breakdown: ``amount`` is the source amount to send.

    Raises:
        InsufficientPoolLiquidity: If either pool has an empty side
    """
    ensure_pool_liquidity(source.pool_info)
    ensure_pool_liquidity(destination.pool_info)
    to_vusd = swap_to_vusd(amount, source, source.pool_info)
    from_vusd = swap_from_vusd(to_vusd.amount_out, destination, destination.pool_info)
    return SwapAndBridgeCalculationData(
        amount_sent=amount,
        vusd_amount=to_vusd.amount_out,
        amount_received=from_vusd.amount_out,
        source_commission=to_vusd.commission,
        destination_commission=from_vusd.commission,
    )


def swap_and_bridge_fee_calculation_reverse(
    amount: int,
    source: SwapPoolInfo,
    destination: SwapPoolInfo,
) -> SwapAndBridgeCalculationData:
    """Reverse breakdown: ``amount`` is the destination amount to receive.

    Raises:
        InsufficientPoolLiquidity: If either pool has an empty side
    """
    ensure_pool_liquidity(source.pool_info)
    ensure_pool_liquidity(destination.pool_info)
    from_vusd = swap_from_vusd_reverse(amount, destination, destination.pool_info)
    to_vusd = swap_to_vusd_reverse(from_vusd.amount_in, source, source.pool_info)
    return SwapAndBridgeCalculationData(
        amount_sent=to_vusd.amount_in,
        vusd_amount=from_vusd.amount_in,
        amount_received=amount,
        source_commission=to_vusd.commission,
        destination_commission=from_vusd.commission,
    )
