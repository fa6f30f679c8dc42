"""Swap pricing, fee breakdowns and pool accounting."""

from .accounting import (
    apr_in_percents,
    calculate_pool_info_imbalance,
    deposit_amount_to_vusd,
    vusd_to_withdrawal_amount,
)
from .fees import (
    SwapAndBridgeCalculationData,
    SwapPoolInfo,
    ensure_pool_liquidity,
    fee_percent_on_destination_chain,
    fee_percent_on_source_chain,
    get_fee_percent,
    swap_and_bridge_fee_calculation,
    swap_and_bridge_fee_calculation_reverse,
)
from .swap import (
    SwapResult,
    TokenTerms,
    add_commission,
    calculate_commission,
    swap_from_vusd,
    swap_from_vusd_reverse,
    swap_to_vusd,
    swap_to_vusd_reverse,
)

__all__ = [
    # Swap engine
    "SwapResult",
    "TokenTerms",
    "calculate_commission",
    "add_commission",
    "swap_to_vusd",
    "swap_from_vusd",
    "swap_to_vusd_reverse",
    "swap_from_vusd_reverse",
    # Fees
    "SwapPoolInfo",
    "SwapAndBridgeCalculationData",
    "get_fee_percent",
    "ensure_pool_liquidity",
    "fee_percent_on_source_chain",
    "fee_percent_on_destination_chain",
    "swap_and_bridge_fee_calculation",
    "swap_and_bridge_fee_calculation_reverse",
    # Accounting
    "deposit_amount_to_vusd",
    "vusd_to_withdrawal_amount",
    "calculate_pool_info_imbalance",
    "apr_in_percents",
]
