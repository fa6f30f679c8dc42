"""Pool snapshot and user balance models.

All balances are integers in system precision (see SYSTEM_PRECISION).
Snapshots are frozen: a newer fetch supersedes them, nothing mutates them.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from bridgecore.constants import REWARD_PRECISION_FACTOR, SYSTEM_PRECISION
from bridgecore.math.precision import convert_int_amount_to_float, format_amount


class PoolInfo(BaseModel):
    """Point-in-time state of one liquidity pool.

    Attributes:
        a_value: Amplification coefficient A
        d_value: Invariant D for a_value, token_balance and vusd_balance
        token_balance: Token side of the pool
        vusd_balance: vUSD side of the pool
        total_lp_amount: Outstanding LP amount
        acc_reward_per_share_p: Accumulated reward per LP share, scaled by 2^52
        imbalance: Optional diagnostic, see calculate_pool_info_imbalance
    """

    a_value: int = Field(alias="aValue", gt=0)
    d_value: int = Field(alias="dValue", ge=0)
    token_balance: int = Field(alias="tokenBalance", ge=0)
    vusd_balance: int = Field(alias="vUsdBalance", ge=0)
    total_lp_amount: int = Field(default=0, alias="totalLpAmount", ge=0)
    acc_reward_per_share_p: int = Field(default=0, alias="accRewardPerShareP", ge=0)
    imbalance: Decimal | None = None

    model_config = {"populate_by_name": True, "frozen": True}

    def with_imbalance(self, imbalance: Decimal) -> PoolInfo:
        """Return a copy of this snapshot carrying the given imbalance."""
        return self.model_copy(update={"imbalance": imbalance})


class UserBalanceInfo(BaseModel):
    """A user's LP position in one pool."""

    lp_amount: int = Field(alias="lpAmount", ge=0)
    reward_debt: int = Field(default=0, alias="rewardDebt", ge=0)

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def user_liquidity(self) -> str:
        """LP amount as a decimal string."""
        return format_amount(convert_int_amount_to_float(self.lp_amount, SYSTEM_PRECISION))

    def earned(self, pool: PoolInfo) -> int:
        """Rewards accrued since the last checkpoint, relative to ``pool``.

        reward_debt is the accRewardPerShareP value at the user's last
        checkpoint. The result is in the pool token's precision; a snapshot
        older than that checkpoint yields 0.
        """
        earned = self.lp_amount * (pool.acc_reward_per_share_p - self.reward_debt)
        if earned <= 0:
            return 0
        return earned // REWARD_PRECISION_FACTOR
