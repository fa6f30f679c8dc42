"""Snapshot caches feeding the pricing engine."""

from .pools import CHAIN_DETAILS_KEY, ChainDetailsCache, PoolInfoCache
from .single_flight import CacheEntry, CacheState, SingleFlightCache

__all__ = [
    "SingleFlightCache",
    "CacheEntry",
    "CacheState",
    "PoolInfoCache",
    "ChainDetailsCache",
    "CHAIN_DETAILS_KEY",
]
