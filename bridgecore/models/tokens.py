"""Token and chain metadata models.

Populated from the backend /token-info payload and read-only afterwards.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from bridgecore.models.chains import ChainType

# chain symbol -> messenger -> average transfer time in ms (None if unsupported)
TransferTimeTable = dict[str, dict[str, int | None]]


class PoolKey(BaseModel):
    """Identifies one liquidity pool; the key of the pool-info cache."""

    chain_symbol: str = Field(alias="chainSymbol")
    pool_address: str = Field(alias="poolAddress")

    model_config = {"populate_by_name": True, "frozen": True}


class TokenWithChainDetails(BaseModel):
    """A bridgeable token together with its pool and chain terms."""

    symbol: str
    name: str = ""
    token_address: str = Field(alias="tokenAddress")
    decimals: int = Field(ge=0, le=77)
    chain_symbol: str = Field(alias="chainSymbol")
    chain_type: ChainType = Field(alias="chainType")
    chain_id: str | None = Field(default=None, alias="chainId")
    allbridge_chain_id: int | None = Field(default=None, alias="allbridgeChainId")
    pool_address: str = Field(alias="poolAddress")
    bridge_address: str | None = Field(default=None, alias="bridgeAddress")
    # Commission as a fraction of the swap output (e.g. 0.0015 for 15 bp)
    fee_share: Decimal = Field(alias="feeShare", ge=0, lt=1)
    apr: Decimal = Decimal(0)
    lp_rate: Decimal | None = Field(default=None, alias="lpRate")
    transfer_time: TransferTimeTable = Field(default_factory=dict, alias="transferTime")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def pool_key(self) -> PoolKey:
        return PoolKey(chain_symbol=self.chain_symbol, pool_address=self.pool_address)


class ChainDetails(BaseModel):
    """A supported chain and the tokens bridgeable on it."""

    chain_symbol: str = Field(alias="chainSymbol")
    chain_type: ChainType = Field(alias="chainType")
    name: str = ""
    chain_id: str | None = Field(default=None, alias="chainId")
    allbridge_chain_id: int | None = Field(default=None, alias="allbridgeChainId")
    bridge_address: str | None = Field(default=None, alias="bridgeAddress")
    tokens: tuple[TokenWithChainDetails, ...] = ()

    model_config = {"populate_by_name": True, "frozen": True}


ChainDetailsMap = dict[str, ChainDetails]
