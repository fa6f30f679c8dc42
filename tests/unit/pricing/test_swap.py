"""Tests for the vUSD swap engine."""

from decimal import Decimal

from bridgecore.math.precision import from_system_precision, to_system_precision
from bridgecore.pricing.swap import (
    add_commission,
    calculate_commission,
    swap_from_vusd,
    swap_from_vusd_reverse,
    swap_to_vusd,
    swap_to_vusd_reverse,
)
from tests.helpers import make_pool, make_token


class TestCommission:
    """Commission taken from a nominal output."""

    def test_rounds_up(self) -> None:
        """15 bp of 100 is 0.15, charged as 1."""
        assert calculate_commission(100, Decimal("0.0015")) == 1

    def test_exact_fraction(self) -> None:
        assert calculate_commission(1_000_000, Decimal("0.001")) == 1_000

    def test_zero_fee(self) -> None:
        assert calculate_commission(1_000_000, Decimal(0)) == 0

    def test_non_positive_output_has_no_commission(self) -> None:
        assert calculate_commission(0, Decimal("0.001")) == 0
        assert calculate_commission(-5, Decimal("0.001")) == 0

    def test_add_commission_covers_net(self) -> None:
        """Grossing up and charging commission again never falls short."""
        fee_share = Decimal("0.0015")
        for net in (1, 999, 1_000, 123_456, 10**18 + 1):
            gross = add_commission(net, fee_share)
            assert gross - calculate_commission(gross, fee_share) >= net

    def test_add_commission_is_tight(self) -> None:
        """One unit less than the gross amount would fall short."""
        fee_share = Decimal("0.001")
        gross = add_commission(1_000, fee_share)
        assert gross == 1_002
        assert (gross - 1) - calculate_commission(gross - 1, fee_share) < 1_000


class TestSwapToVusd:
    """Source leg: token into vUSD."""

    def test_balanced_pool_near_one_to_one(self) -> None:
        """Swapping 1000 into a balanced 1M/1M pool with A=20 yields 999-1000 vUSD."""
        token = make_token(decimals=3)
        pool = make_pool(token_balance=1_000_000, vusd_balance=1_000_000)
        result = swap_to_vusd(1_000, token, pool)
        assert 999 <= result.amount_out <= 1_000
        assert result.commission == 0
        assert result.amount_in == 1_000

    def test_commission_deducted_from_output(self) -> None:
        token = make_token(decimals=6, fee_share="0.001")
        pool = make_pool()
        no_fee = swap_to_vusd(1_000_000_000, make_token(decimals=6), pool)
        result = swap_to_vusd(1_000_000_000, token, pool)
        assert result.commission == calculate_commission(no_fee.amount_out, Decimal("0.001"))
        assert result.amount_out == no_fee.amount_out - result.commission

    def test_output_decreases_along_the_curve(self) -> None:
        """Repeated same-direction swaps of equal size yield strictly less each time."""
        token = make_token(decimals=3)
        pool = make_pool(token_balance=1_000_000, vusd_balance=1_000_000)
        outputs = []
        for _ in range(5):
            result = swap_to_vusd(100_000, token, pool)
            outputs.append(result.amount_out)
            pool = pool.model_copy(
                update={
                    "token_balance": pool.token_balance + 100_000,
                    "vusd_balance": pool.vusd_balance - result.amount_out,
                }
            )
        assert outputs[0] < 100_000
        assert all(later < earlier for earlier, later in zip(outputs, outputs[1:]))

    def test_sub_precision_amount_yields_nothing(self) -> None:
        """Dust below one system-precision tick is truncated away."""
        token = make_token(decimals=6)
        assert swap_to_vusd(999, token, make_pool()).amount_out == 0

    def test_empty_pool_is_not_positive(self) -> None:
        """A pool with no vUSD pays nothing out."""
        token = make_token(decimals=3)
        pool = make_pool(token_balance=1_000_000, vusd_balance=0, d=0)
        assert swap_to_vusd(1_000, token, pool).amount_out == 0


class TestSwapFromVusd:
    """Destination leg: vUSD into token."""

    def test_output_in_token_precision(self) -> None:
        """vUSD in system precision comes out in 18-decimal units."""
        token = make_token(decimals=18)
        result = swap_from_vusd(1_000, token, make_pool())
        assert result.amount_out == 1_000 * 10**15

    def test_commission_on_nominal_output(self) -> None:
        token = make_token(decimals=18, fee_share="0.001")
        result = swap_from_vusd(1_000, token, make_pool())
        assert result.commission == 10**15
        assert result.amount_out + result.commission == 1_000 * 10**15

    def test_imbalanced_pool_pays_bonus(self) -> None:
        """A pool short on vUSD pays more than 1:1 for incoming vUSD."""
        token = make_token(decimals=3)
        pool = make_pool(token_balance=1_500_000, vusd_balance=500_000)
        assert swap_from_vusd(1_000, token, pool).amount_out > 1_000


class TestReverseSwaps:
    """Reverse functions invert the forward ones within rounding."""

    def test_to_vusd_reverse_inverts_forward(self) -> None:
        token = make_token(decimals=6, fee_share="0.001")
        pool = make_pool(token_balance=1_200_000_000, vusd_balance=800_000_000)
        amount = 250_000_000_000  # 250,000 USDC
        vusd = swap_to_vusd(amount, token, pool).amount_out
        required = swap_to_vusd_reverse(vusd, token, pool).amount_in
        assert abs(required - amount) <= 5 * 10**3

    def test_from_vusd_reverse_inverts_forward(self) -> None:
        token = make_token(decimals=18, fee_share="0.0015")
        pool = make_pool(token_balance=800_000_000, vusd_balance=1_200_000_000)
        vusd = 50_000_000
        received = swap_from_vusd(vusd, token, pool).amount_out
        required = swap_from_vusd_reverse(received, token, pool).amount_in
        assert abs(required - vusd) <= 5

    def test_reverse_commission_units(self) -> None:
        """to_vusd_reverse reports commission in vUSD; from_vusd_reverse in token units."""
        token = make_token(decimals=6, fee_share="0.001")
        pool = make_pool()
        to_vusd = swap_to_vusd_reverse(999_000, token, pool)
        assert to_vusd.amount_out == 999_000
        assert to_vusd.commission == add_commission(999_000, token.fee_share) - 999_000

        from_vusd = swap_from_vusd_reverse(999_000_000, token, pool)
        assert from_vusd.amount_out == 999_000_000
        assert from_vusd.commission == add_commission(999_000_000, token.fee_share) - 999_000_000

    def test_reverse_of_zero_is_zero(self) -> None:
        token = make_token(decimals=6)
        pool = make_pool()
        assert swap_from_vusd_reverse(0, token, pool).amount_in == 0
        assert swap_to_vusd_reverse(0, token, pool).amount_in == 0

    def test_reverse_matches_precision_helpers(self) -> None:
        """A zero-fee reverse on a balanced pool needs about the amount itself."""
        token = make_token(decimals=6)
        pool = make_pool()
        amount = 5_000_000  # 5 USDC
        vusd = swap_from_vusd_reverse(amount, token, pool).amount_in
        assert abs(vusd - to_system_precision(amount, 6)) <= 1
        sent = swap_to_vusd_reverse(vusd, token, pool).amount_in
        assert abs(sent - amount) <= from_system_precision(2, 6)


class TestZeroInvariant:
    """A snapshot with D = 0 pays nothing out, whichever side holds funds."""

    def test_to_vusd_with_empty_token_side(self) -> None:
        token = make_token(decimals=3)
        pool = make_pool(token_balance=0, vusd_balance=1_000_000, d=0)
        result = swap_to_vusd(1, token, pool)
        assert result.amount_out == 0
        assert result.commission == 0

    def test_from_vusd_with_empty_vusd_side(self) -> None:
        token = make_token(decimals=3)
        pool = make_pool(token_balance=1_000_000, vusd_balance=0, d=0)
        assert swap_from_vusd(1_000, token, pool).amount_out == 0
