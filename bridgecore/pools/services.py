"""Liquidity pool services.

Chain-specific pool access (EVM, Solana, Tron) is provided by external
implementations of the ChainPoolService capability set, registered per
ChainType. LiquidityPoolService combines them with the pool accounting
helpers.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

import structlog

from bridgecore.client.caching import CachingCoreClient
from bridgecore.constants import SYSTEM_PRECISION
from bridgecore.math.precision import (
    AmountLike,
    convert_float_amount_to_int,
    convert_int_amount_to_float,
    from_system_precision,
    to_system_precision,
)
from bridgecore.models.chains import ChainType
from bridgecore.models.pool import PoolInfo, UserBalanceInfo
from bridgecore.models.tokens import TokenWithChainDetails
from bridgecore.pricing.accounting import (
    calculate_pool_info_imbalance,
    deposit_amount_to_vusd,
    vusd_to_withdrawal_amount,
)

logger = structlog.get_logger()


class ChainPoolService(Protocol):
    """Capabilities a chain family must provide for pool operations."""

    async def get_pool_info_from_chain(self, token: TokenWithChainDetails) -> PoolInfo:
        """Read the pool snapshot for ``token`` directly from its chain."""
        ...

    async def get_user_balance_info(
        self, account: str, token: TokenWithChainDetails
    ) -> UserBalanceInfo:
        """Read ``account``'s LP position in ``token``'s pool."""
        ...


class ChainPoolServiceRegistry:
    """Maps each ChainType to the service that handles its pools."""

    def __init__(self, services: dict[ChainType, ChainPoolService] | None = None) -> None:
        self._services: dict[ChainType, ChainPoolService] = dict(services or {})

    def register(self, chain_type: ChainType, service: ChainPoolService) -> None:
        if chain_type in self._services:
            logger.debug("chain_pool_service_replaced", chain_type=chain_type.value)
        self._services[chain_type] = service

    def get(self, chain_type: ChainType) -> ChainPoolService:
        """Look up the service for ``chain_type``.

        Raises:
            LookupError: If no service is registered for the chain type
        """
        try:
            return self._services[chain_type]
        except KeyError:
            raise LookupError(f"No pool service registered for chain type {chain_type.value}") from None

    def __contains__(self, chain_type: ChainType) -> bool:
        return chain_type in self._services


class LiquidityPoolService:
    """Deposit and withdrawal estimates and LP position lookups."""

    def __init__(self, api: CachingCoreClient, services: ChainPoolServiceRegistry) -> None:
        self.api = api
        self.services = services

    async def get_pool_info_from_chain(self, token: TokenWithChainDetails) -> PoolInfo:
        """Pool snapshot read from chain, with its imbalance filled in."""
        pool = await self.services.get(token.chain_type).get_pool_info_from_chain(token)
        return pool.with_imbalance(calculate_pool_info_imbalance(pool))

    async def get_user_balance_info(
        self, account: str, token: TokenWithChainDetails
    ) -> UserBalanceInfo:
        return await self.services.get(token.chain_type).get_user_balance_info(account, token)

    async def get_amount_to_be_deposited(
        self, amount: AmountLike, token: TokenWithChainDetails
    ) -> Decimal:
        """LP amount (vUSD) credited for depositing ``amount`` tokens.

        Args:
            amount: Decimal token amount, e.g. "100.5"
            token: Token to deposit

        Returns:
            LP amount as a decimal

        Raises:
            ValidationError: If amount has more decimals than the token
        """
        amount_int = convert_float_amount_to_int(amount, token.decimals)
        pool = await self.get_pool_info_from_chain(token)
        vusd = deposit_amount_to_vusd(
            to_system_precision(amount_int, token.decimals),
            pool.a_value,
            pool.d_value,
            pool.token_balance,
            pool.vusd_balance,
        )
        return convert_int_amount_to_float(vusd, SYSTEM_PRECISION)

    async def get_amount_to_be_withdrawn(
        self, amount: AmountLike, account: str, token: TokenWithChainDetails
    ) -> Decimal:
        """Token amount paid out for burning ``amount`` LP, rewards included.

        Args:
            amount: Decimal LP amount
            account: LP holder
            token: Pool token

        Raises:
            ValidationError: If amount has more decimals than system precision
        """
        lp_amount = convert_float_amount_to_int(amount, SYSTEM_PRECISION)
        pool = await self.get_pool_info_from_chain(token)
        token_amount = from_system_precision(vusd_to_withdrawal_amount(lp_amount), token.decimals)
        user_balance = await self.get_user_balance_info(account, token)
        earned = user_balance.earned(pool)
        logger.debug(
            "withdrawal_estimated",
            chain=token.chain_symbol,
            token=token.symbol,
            token_amount=token_amount,
            earned=earned,
        )
        return convert_int_amount_to_float(token_amount + earned, token.decimals)
