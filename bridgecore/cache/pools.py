"""Pool-info and chain-details caches.

One instance of each is owned by a CachingCoreClient and lives as long as
the SDK instance that constructed it.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from bridgecore.cache.single_flight import SingleFlightCache
from bridgecore.constants import DEFAULT_CHAIN_DETAILS_TTL_SECONDS, DEFAULT_POOL_INFO_TTL_SECONDS
from bridgecore.models.pool import PoolInfo
from bridgecore.models.tokens import ChainDetailsMap, PoolKey

PoolInfoFetcher = Callable[[PoolKey], Awaitable[PoolInfo]]
ChainDetailsFetcher = Callable[[], Awaitable[ChainDetailsMap]]

# The token catalogue is fetched as a whole, under a single key
CHAIN_DETAILS_KEY = "chain-details"


class PoolInfoCache(SingleFlightCache[PoolKey, PoolInfo]):
    """Latest PoolInfo snapshot per pool."""

    def __init__(
        self,
        fetch: PoolInfoFetcher,
        ttl_seconds: float = DEFAULT_POOL_INFO_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(fetch, ttl_seconds, name="pool_info", clock=clock)


class ChainDetailsCache(SingleFlightCache[str, ChainDetailsMap]):
    """The chain/token catalogue, cached as one snapshot."""

    def __init__(
        self,
        fetch: ChainDetailsFetcher,
        ttl_seconds: float = DEFAULT_CHAIN_DETAILS_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        async def fetch_all(_key: str) -> ChainDetailsMap:
            return await fetch()

        super().__init__(fetch_all, ttl_seconds, name="chain_details", clock=clock)

    async def get_chain_details_map(self) -> ChainDetailsMap:
        return await self.get(CHAIN_DETAILS_KEY)

    def refresh_chain_details(self) -> None:
        self.refresh(CHAIN_DETAILS_KEY)
