"""Caching wrapper around the backend API."""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from bridgecore.cache import ChainDetailsCache, PoolInfoCache
from bridgecore.client.core_api import CoreApi
from bridgecore.config import DEFAULT_SDK_CONFIG, SdkConfig
from bridgecore.models.pool import PoolInfo
from bridgecore.models.tokens import ChainDetailsMap, PoolKey, TokenWithChainDetails
from bridgecore.models.transfer import TransferStatusResponse

logger = structlog.get_logger()


class CachingCoreClient:
    """Serves catalogue and pool snapshots from per-instance caches.

    Each instance owns its own ChainDetailsCache and PoolInfoCache; nothing
    is shared between SDK instances.
    """

    def __init__(
        self,
        api: CoreApi,
        config: SdkConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        config = config or DEFAULT_SDK_CONFIG
        self.api = api
        self.chain_details_cache = ChainDetailsCache(
            api.get_chain_details_map, config.chain_details_ttl_seconds, clock=clock
        )
        self.pool_info_cache = PoolInfoCache(
            api.get_pool_info, config.pool_info_ttl_seconds, clock=clock
        )

    async def get_chain_details_map(self) -> ChainDetailsMap:
        return await self.chain_details_cache.get_chain_details_map()

    async def tokens(self) -> list[TokenWithChainDetails]:
        chain_details_map = await self.get_chain_details_map()
        return [token for details in chain_details_map.values() for token in details.tokens]

    async def get_pool_info_by_key(self, pool_key: PoolKey) -> PoolInfo:
        return await self.pool_info_cache.get(pool_key)

    async def get_pool_info_by_token(self, token: TokenWithChainDetails) -> PoolInfo:
        return await self.pool_info_cache.get(token.pool_key)

    async def get_transfer_status(self, chain_symbol: str, tx_id: str) -> TransferStatusResponse:
        """Uncached: status changes with every confirmation."""
        return await self.api.get_transfer_status(chain_symbol, tx_id)

    def refresh_pool_info(self) -> None:
        """Invalidate every cached pool snapshot; the next read re-fetches."""
        self.pool_info_cache.refresh_all()
        logger.info("pool_info_refresh_requested", pools=len(self.pool_info_cache))

    def refresh_chain_details(self) -> None:
        self.chain_details_cache.refresh_chain_details()
