"""Pydantic models for tokens, chains and pool snapshots."""

from bridgecore.models.chains import CHAIN_PROPERTIES, ChainType, Messenger, chain_type_for_symbol
from bridgecore.models.pool import PoolInfo, UserBalanceInfo
from bridgecore.models.tokens import (
    ChainDetails,
    ChainDetailsMap,
    PoolKey,
    TokenWithChainDetails,
    TransferTimeTable,
)
from bridgecore.models.transfer import BridgeTransaction, TransferStatusResponse

__all__ = [
    # Chains
    "ChainType",
    "Messenger",
    "CHAIN_PROPERTIES",
    "chain_type_for_symbol",
    # Tokens
    "PoolKey",
    "TokenWithChainDetails",
    "ChainDetails",
    "ChainDetailsMap",
    "TransferTimeTable",
    # Pools
    "PoolInfo",
    "UserBalanceInfo",
    # Transfers
    "BridgeTransaction",
    "TransferStatusResponse",
]
