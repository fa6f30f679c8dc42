"""Test helpers module for shared test utilities.

- constants: Chain symbols, addresses and common pool shapes
- factories: Token and pool factory functions
"""

from tests.helpers.constants import (
    BALANCED_BALANCE,
    BSC,
    BSC_USDT,
    BSC_USDT_POOL,
    DEFAULT_A,
    DEFAULT_FEE_SHARE,
    ETH,
    ETH_TRANSFER_TIME,
    ETH_USDC,
    ETH_USDC_POOL,
    SOL,
    SOL_USDC,
    SOL_USDC_POOL,
    TRX,
)
from tests.helpers.factories import make_pool, make_token, pool_payload

__all__ = [
    # Constants
    "ETH",
    "BSC",
    "SOL",
    "TRX",
    "ETH_USDC",
    "ETH_USDC_POOL",
    "BSC_USDT",
    "BSC_USDT_POOL",
    "SOL_USDC",
    "SOL_USDC_POOL",
    "DEFAULT_A",
    "BALANCED_BALANCE",
    "DEFAULT_FEE_SHARE",
    "ETH_TRANSFER_TIME",
    # Factories
    "make_token",
    "make_pool",
    "pool_payload",
]
