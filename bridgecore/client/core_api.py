"""Backend API client.

Thin httpx transport for the backend endpoints:

- GET  /token-info               -> chain/token catalogue
- POST /pool-info                -> pool snapshots for a list of pool keys
- GET  /chain/{symbol}/{txId}    -> transfer status

No retries: transport errors and non-2xx responses propagate to the
caller (the caches wrap them as FetchFailure).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

import httpx
import structlog

from bridgecore.constants import SDK_VERSION
from bridgecore.config import DEFAULT_SDK_CONFIG, SdkConfig
from bridgecore.models.chains import CHAIN_PROPERTIES
from bridgecore.models.pool import PoolInfo
from bridgecore.models.tokens import ChainDetails, ChainDetailsMap, PoolKey, TokenWithChainDetails
from bridgecore.models.transfer import TransferStatusResponse

logger = structlog.get_logger()


class CoreApi(Protocol):
    """Backend calls the SDK depends on."""

    async def get_chain_details_map(self) -> ChainDetailsMap:
        """Fetch the full chain/token catalogue."""
        ...

    async def get_pool_info(self, pool_key: PoolKey) -> PoolInfo:
        """Fetch the current snapshot of one pool."""
        ...

    async def get_transfer_status(self, chain_symbol: str, tx_id: str) -> TransferStatusResponse:
        """Fetch the progress of a transfer sent on ``chain_symbol``."""
        ...


def map_chain_details_response(data: dict[str, Any]) -> ChainDetailsMap:
    """Map a /token-info payload to a ChainDetailsMap.

    Chains whose symbol is unknown are skipped.
    """
    result: ChainDetailsMap = {}
    for chain_symbol, chain_data in data.items():
        properties = CHAIN_PROPERTIES.get(chain_symbol)
        if properties is None:
            logger.debug("unknown_chain_skipped", chain_symbol=chain_symbol)
            continue
        chain_type, chain_name = properties
        chain_transfer_time = chain_data.get("transferTime") or {}
        tokens = tuple(
            TokenWithChainDetails.model_validate(
                {
                    "transferTime": chain_transfer_time,
                    **token,
                    "chainSymbol": chain_symbol,
                    "chainType": chain_type,
                    "allbridgeChainId": chain_data.get("chainId"),
                    "bridgeAddress": chain_data.get("bridgeAddress"),
                }
            )
            for token in chain_data.get("tokens", [])
        )
        result[chain_symbol] = ChainDetails(
            chain_symbol=chain_symbol,
            chain_type=chain_type,
            name=chain_data.get("name") or chain_name,
            allbridge_chain_id=chain_data.get("chainId"),
            bridge_address=chain_data.get("bridgeAddress"),
            tokens=tokens,
        )
    return result


def map_pool_info_response(data: dict[str, Any]) -> dict[PoolKey, PoolInfo]:
    """Map a /pool-info payload ({chain: {pool address: info}}) to snapshots."""
    return {
        PoolKey(chain_symbol=chain_symbol, pool_address=pool_address): PoolInfo.model_validate(info)
        for chain_symbol, pools in data.items()
        for pool_address, info in pools.items()
    }


class CoreApiClient:
    """Async HTTP client for the backend pricing/status API."""

    def __init__(
        self,
        config: SdkConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: SDK configuration. Uses DEFAULT_SDK_CONFIG if not provided.
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.config = config or DEFAULT_SDK_CONFIG
        self._client = httpx.AsyncClient(
            base_url=self.config.core_api_url,
            headers={
                "Accept": "application/json",
                **self.config.core_api_headers,
                "User-Agent": f"bridgecore/{SDK_VERSION}",
            },
            timeout=self.config.request_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> CoreApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_chain_details_map(self) -> ChainDetailsMap:
        response = await self._client.get("/token-info")
        response.raise_for_status()
        chain_details = map_chain_details_response(response.json())
        logger.info("chain_details_fetched", chains=len(chain_details))
        return chain_details

    async def get_pool_info_map(self, pool_keys: Sequence[PoolKey]) -> dict[PoolKey, PoolInfo]:
        body = {"pools": [key.model_dump(by_alias=True) for key in pool_keys]}
        response = await self._client.post("/pool-info", json=body)
        response.raise_for_status()
        return map_pool_info_response(response.json())

    async def get_pool_info(self, pool_key: PoolKey) -> PoolInfo:
        """Fetch one pool snapshot.

        Raises:
            KeyError: If the response does not contain the requested pool
        """
        pool_map = await self.get_pool_info_map([pool_key])
        try:
            pool = pool_map[pool_key]
        except KeyError:
            raise KeyError(
                f"Pool {pool_key.pool_address} on {pool_key.chain_symbol} missing from response"
            ) from None
        logger.debug(
            "pool_info_fetched",
            chain=pool_key.chain_symbol,
            pool=pool_key.pool_address,
            token_balance=pool.token_balance,
            vusd_balance=pool.vusd_balance,
        )
        return pool

    async def get_transfer_status(self, chain_symbol: str, tx_id: str) -> TransferStatusResponse:
        response = await self._client.get(f"/chain/{chain_symbol}/{tx_id}")
        response.raise_for_status()
        status = TransferStatusResponse.model_validate(response.json())
        logger.debug(
            "transfer_status_fetched",
            chain=chain_symbol,
            tx_id=tx_id,
            signatures=status.signatures_count,
            complete=status.is_complete,
        )
        return status
