"""Pytest configuration and fixtures."""

import asyncio

import pytest

from bridgecore.models.chains import ChainType
from bridgecore.models.pool import PoolInfo, UserBalanceInfo
from bridgecore.models.tokens import ChainDetails, ChainDetailsMap, PoolKey, TokenWithChainDetails
from bridgecore.models.transfer import TransferStatusResponse
from bridgecore.sdk import BridgeCoreSdk
from tests.helpers import (
    BSC,
    BSC_USDT,
    BSC_USDT_POOL,
    DEFAULT_FEE_SHARE,
    ETH,
    ETH_TRANSFER_TIME,
    make_pool,
    make_token,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCoreApi:
    """In-memory CoreApi that records every fetch.

    Set ``gate`` to an unset asyncio.Event to hold pool fetches in flight,
    and ``error`` to make every fetch fail.
    """

    def __init__(
        self,
        chain_details: ChainDetailsMap | None = None,
        pools: dict[PoolKey, PoolInfo] | None = None,
    ) -> None:
        self.chain_details = chain_details or {}
        self.pools = dict(pools or {})
        self.pool_calls: list[PoolKey] = []
        self.chain_details_calls = 0
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.transfers: dict[tuple[str, str], TransferStatusResponse] = {}

    async def get_chain_details_map(self) -> ChainDetailsMap:
        self.chain_details_calls += 1
        if self.error is not None:
            raise self.error
        return self.chain_details

    async def get_pool_info(self, pool_key: PoolKey) -> PoolInfo:
        self.pool_calls.append(pool_key)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.pools[pool_key]

    async def get_transfer_status(self, chain_symbol: str, tx_id: str) -> TransferStatusResponse:
        return self.transfers[(chain_symbol, tx_id)]


class FakeChainPoolService:
    """ChainPoolService backed by fixed pool snapshots and LP positions."""

    def __init__(
        self,
        pools: dict[PoolKey, PoolInfo] | None = None,
        balances: dict[tuple[str, PoolKey], UserBalanceInfo] | None = None,
    ) -> None:
        self.pools = dict(pools or {})
        self.balances = dict(balances or {})

    async def get_pool_info_from_chain(self, token: TokenWithChainDetails) -> PoolInfo:
        return self.pools[token.pool_key]

    async def get_user_balance_info(
        self, account: str, token: TokenWithChainDetails
    ) -> UserBalanceInfo:
        return self.balances[(account, token.pool_key)]


def make_chain_details(*tokens: TokenWithChainDetails) -> ChainDetailsMap:
    """Group tokens into a ChainDetailsMap keyed by chain symbol."""
    grouped: dict[str, list[TokenWithChainDetails]] = {}
    for token in tokens:
        grouped.setdefault(token.chain_symbol, []).append(token)
    return {
        chain_symbol: ChainDetails(
            chain_symbol=chain_symbol,
            chain_type=chain_tokens[0].chain_type,
            name=chain_symbol,
            tokens=tuple(chain_tokens),
        )
        for chain_symbol, chain_tokens in grouped.items()
    }


@pytest.fixture
def clock() -> FakeClock:
    """A clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def source_token() -> TokenWithChainDetails:
    """USDC on Ethereum: 6 decimals, 10 bp commission."""
    return make_token(
        symbol="USDC",
        chain_symbol=ETH,
        decimals=6,
        fee_share=DEFAULT_FEE_SHARE,
        transfer_time=ETH_TRANSFER_TIME,
        apr="0.0523",
    )


@pytest.fixture
def destination_token() -> TokenWithChainDetails:
    """USDT on BNB Chain: 18 decimals, 10 bp commission."""
    return make_token(
        symbol="USDT",
        chain_symbol=BSC,
        decimals=18,
        fee_share=DEFAULT_FEE_SHARE,
        pool_address=BSC_USDT_POOL,
        token_address=BSC_USDT,
        chain_type=ChainType.EVM,
    )


@pytest.fixture
def balanced_pool() -> PoolInfo:
    """A 1,000,000 / 1,000,000 pool with A=20."""
    return make_pool()


@pytest.fixture
def fake_api(
    source_token: TokenWithChainDetails,
    destination_token: TokenWithChainDetails,
    balanced_pool: PoolInfo,
) -> FakeCoreApi:
    """Fake backend serving both fixture tokens over balanced pools."""
    return FakeCoreApi(
        chain_details=make_chain_details(source_token, destination_token),
        pools={
            source_token.pool_key: balanced_pool,
            destination_token.pool_key: balanced_pool,
        },
    )


@pytest.fixture
def pool_service(fake_api: FakeCoreApi) -> FakeChainPoolService:
    """Chain pool service reading the same snapshots as the backend."""
    return FakeChainPoolService(pools=fake_api.pools)


@pytest.fixture
def sdk(fake_api: FakeCoreApi) -> BridgeCoreSdk:
    """SDK wired to the fake backend."""
    return BridgeCoreSdk(api=fake_api)
