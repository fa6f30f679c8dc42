"""Top-level SDK facade.

Prices transfers between two tokens on (usually) different chains. Every
pricing call reads each pool once from the cache and computes on those
immutable snapshots, even if a refresh replaces them meanwhile.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal

import structlog

from bridgecore.client.caching import CachingCoreClient
from bridgecore.client.core_api import CoreApi, CoreApiClient
from bridgecore.config import DEFAULT_SDK_CONFIG, SdkConfig
from bridgecore.errors import InsufficientPoolLiquidity
from bridgecore.math.precision import (
    AmountLike,
    convert_float_amount_to_int,
    convert_int_amount_to_float,
)
from bridgecore.models.chains import Messenger
from bridgecore.models.pool import PoolInfo, UserBalanceInfo
from bridgecore.models.tokens import ChainDetailsMap, TokenWithChainDetails
from bridgecore.models.transfer import TransferStatusResponse
from bridgecore.pools.services import ChainPoolServiceRegistry, LiquidityPoolService
from bridgecore.pricing.accounting import apr_in_percents
from bridgecore.pricing.fees import (
    SwapAndBridgeCalculationData,
    SwapPoolInfo,
    ensure_pool_liquidity,
    fee_percent_on_destination_chain,
    fee_percent_on_source_chain,
    swap_and_bridge_fee_calculation,
    swap_and_bridge_fee_calculation_reverse,
)
from bridgecore.pricing.swap import (
    swap_from_vusd,
    swap_from_vusd_reverse,
    swap_to_vusd,
    swap_to_vusd_reverse,
)

logger = structlog.get_logger()


class BridgeCoreSdk:
    """Pricing entry point; one instance owns one set of caches.

    Attributes:
        config: SDK configuration
        api: Caching client serving catalogue and pool snapshots
        pool: Liquidity pool service
    """

    def __init__(
        self,
        config: SdkConfig | None = None,
        *,
        api: CoreApi | None = None,
        pool_services: ChainPoolServiceRegistry | None = None,
    ) -> None:
        """Initialize the SDK.

        Args:
            config: SDK configuration. Uses DEFAULT_SDK_CONFIG if not provided.
            api: Fetch collaborator. Defaults to an HTTP CoreApiClient.
            pool_services: Chain-specific pool services for LP operations
        """
        self.config = config or DEFAULT_SDK_CONFIG
        self._owned_client = CoreApiClient(self.config) if api is None else None
        self.api = CachingCoreClient(api or self._owned_client, self.config)
        self.pool = LiquidityPoolService(self.api, pool_services or ChainPoolServiceRegistry())

    async def __aenter__(self) -> BridgeCoreSdk:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owned_client is not None:
            await self._owned_client.aclose()

    # --- Catalogue ---

    async def chain_details_map(self) -> ChainDetailsMap:
        """Supported tokens grouped by chain symbol."""
        return await self.api.get_chain_details_map()

    async def tokens(self) -> list[TokenWithChainDetails]:
        """All supported tokens."""
        return await self.api.tokens()

    async def tokens_by_chain(self, chain_symbol: str) -> list[TokenWithChainDetails]:
        """Supported tokens on one chain.

        Raises:
            KeyError: If the chain is not supported
        """
        chain_details_map = await self.api.get_chain_details_map()
        return list(chain_details_map[chain_symbol].tokens)

    # --- Pricing ---

    async def _pools(
        self,
        source_token: TokenWithChainDetails,
        destination_token: TokenWithChainDetails,
    ) -> tuple[PoolInfo, PoolInfo]:
        source_pool, destination_pool = await asyncio.gather(
            self.api.get_pool_info_by_token(source_token),
            self.api.get_pool_info_by_token(destination_token),
        )
        ensure_pool_liquidity(source_pool)
        ensure_pool_liquidity(destination_pool)
        return source_pool, destination_pool

    async def calculate_fee_percent_on_source_chain(
        self,
        amount: AmountLike,
        source_token: TokenWithChainDetails,
    ) -> Decimal:
        """Fraction of ``amount`` charged when swapping into vUSD on the source chain.

        Excludes the destination-chain fee and gas.

        Raises:
            ValidationError: If amount has more decimals than the source token
            InsufficientPoolLiquidity: If the source pool is empty or the amount prices to nothing
        """
        amount_int = convert_float_amount_to_int(amount, source_token.decimals)
        if amount_int == 0:
            return Decimal(0)
        pool = await self.api.get_pool_info_by_token(source_token)
        ensure_pool_liquidity(pool)
        return fee_percent_on_source_chain(amount_int, source_token, pool)

    async def calculate_fee_percent_on_destination_chain(
        self,
        amount: AmountLike,
        source_token: TokenWithChainDetails,
        destination_token: TokenWithChainDetails,
    ) -> Decimal:
        """Fraction charged when swapping out of vUSD on the destination chain.

        Applies to the amount left after the source-chain fee.

        Raises:
            ValidationError: If amount has more decimals than the source token
            InsufficientPoolLiquidity: If either pool is empty or a leg produces nothing
        """
        amount_int = convert_float_amount_to_int(amount, source_token.decimals)
        if amount_int == 0:
            return Decimal(0)
        source_pool, destination_pool = await self._pools(source_token, destination_token)
        return fee_percent_on_destination_chain(
            amount_int, source_token, source_pool, destination_token, destination_pool
        )

    async def get_amount_to_be_received(
        self,
        amount_to_send: AmountLike,
        source_token: TokenWithChainDetails,
        destination_token: TokenWithChainDetails,
    ) -> Decimal:
        """Amount the recipient gets for sending ``amount_to_send``.

        Raises:
            ValidationError: If the amount has more decimals than the source token
            InsufficientPoolLiquidity: If the computed output is not positive
            FetchFailure: If a pool snapshot could not be fetched
        """
        amount_int = convert_float_amount_to_int(amount_to_send, source_token.decimals)
        source_pool, destination_pool = await self._pools(source_token, destination_token)

        vusd = swap_to_vusd(amount_int, source_token, source_pool).amount_out
        result = swap_from_vusd(vusd, destination_token, destination_pool).amount_out
        if result <= 0:
            logger.info(
                "insufficient_pool_liquidity",
                direction="forward",
                source=source_token.chain_symbol,
                destination=destination_token.chain_symbol,
                amount=amount_int,
                result=result,
            )
            raise InsufficientPoolLiquidity()
        return convert_int_amount_to_float(result, destination_token.decimals)

    async def get_amount_to_send(
        self,
        amount_to_be_received: AmountLike,
        source_token: TokenWithChainDetails,
        destination_token: TokenWithChainDetails,
    ) -> Decimal:
        """Amount to send so that the recipient gets ``amount_to_be_received``.

        Raises:
            ValidationError: If the amount has more decimals than the destination token
            InsufficientPoolLiquidity: If the computed input is not positive
            FetchFailure: If a pool snapshot could not be fetched
        """
        amount_int = convert_float_amount_to_int(amount_to_be_received, destination_token.decimals)
        source_pool, destination_pool = await self._pools(source_token, destination_token)

        vusd = swap_from_vusd_reverse(amount_int, destination_token, destination_pool).amount_in
        result = swap_to_vusd_reverse(vusd, source_token, source_pool).amount_in
        if vusd <= 0 or result <= 0:
            logger.info(
                "insufficient_pool_liquidity",
                direction="reverse",
                source=source_token.chain_symbol,
                destination=destination_token.chain_symbol,
                amount=amount_int,
                result=result,
            )
            raise InsufficientPoolLiquidity()
        return convert_int_amount_to_float(result, source_token.decimals)

    def swap_and_bridge_fee_calculation(
        self,
        amount_in_token_precision: int,
        source_pool_info: SwapPoolInfo,
        destination_pool_info: SwapPoolInfo,
    ) -> SwapAndBridgeCalculationData:
        return swap_and_bridge_fee_calculation(
            amount_in_token_precision, source_pool_info, destination_pool_info
        )

    def swap_and_bridge_fee_calculation_reverse(
        self,
        amount_in_token_precision: int,
        source_pool_info: SwapPoolInfo,
        destination_pool_info: SwapPoolInfo,
    ) -> SwapAndBridgeCalculationData:
        return swap_and_bridge_fee_calculation_reverse(
            amount_in_token_precision, source_pool_info, destination_pool_info
        )

    # --- Pools and misc ---

    async def get_user_balance_info(
        self, account: str, token: TokenWithChainDetails
    ) -> UserBalanceInfo:
        return await self.pool.get_user_balance_info(account, token)

    def get_average_transfer_time(
        self,
        source_token: TokenWithChainDetails,
        destination_token: TokenWithChainDetails,
        messenger: Messenger,
    ) -> int | None:
        """Average transfer time in ms, or None if the route is unsupported."""
        by_messenger = source_token.transfer_time.get(destination_token.chain_symbol) or {}
        return by_messenger.get(messenger.value)

    async def get_transfer_status(self, chain_symbol: str, tx_id: str) -> TransferStatusResponse:
        """Progress of the transfer sent in transaction ``tx_id`` on ``chain_symbol``.

        Raises:
            httpx.HTTPStatusError: If the backend does not know the transfer
        """
        return await self.api.get_transfer_status(chain_symbol, tx_id)

    def refresh_pool_info(self) -> None:
        """Force every cached pool snapshot to be re-fetched on next use.

        Snapshots also expire on their own after the configured TTL.
        """
        self.api.refresh_pool_info()

    def apr_in_percents(self, apr: Decimal | str | int) -> str:
        return apr_in_percents(apr)
