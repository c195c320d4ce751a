"""Tests for the fee parameter and its administrative setter."""

import pytest

from exchange.errors import FeeOutOfRange, Unauthorized
from exchange.models import FeeChanged
from tests.helpers import ADMIN, ALICE, BOB, DAI, E18, ENGINE, Market


def test_default_fee(market: Market):
    assert market.exchange.fee == 3


def test_only_initializer_holds_permission(market: Market):
    assert market.exchange.has_permission(ADMIN)
    assert not market.exchange.has_permission(ALICE)
    assert not market.exchange.has_permission(ENGINE)


class TestSetFee:
    def test_admin_updates_fee(self, market: Market):
        market.exchange.set_fee(25, ADMIN)

        assert market.exchange.fee == 25
        assert market.exchange.events.records == [FeeChanged(new_fee=25)]

    @pytest.mark.parametrize("fee", [0, 1000])
    def test_bounds_are_inclusive(self, market: Market, fee: int):
        market.exchange.set_fee(fee, ADMIN)
        assert market.exchange.fee == fee

    def test_non_admin_rejected(self, market: Market):
        with pytest.raises(Unauthorized):
            market.exchange.set_fee(10, ALICE)
        assert market.exchange.fee == 3
        assert len(market.exchange.events) == 0

    def test_permission_checked_before_range(self, market: Market):
        with pytest.raises(Unauthorized):
            market.exchange.set_fee(5000, ALICE)

    @pytest.mark.parametrize("fee", [-1, 1001, True, 2.5])
    def test_out_of_range(self, market: Market, fee):
        with pytest.raises(FeeOutOfRange):
            market.exchange.set_fee(fee, ADMIN)
        assert market.exchange.fee == 3
        assert len(market.exchange.events) == 0


class TestFeeAppliesToPricing:
    def test_new_fee_used_by_next_swap(self, seeded_market: Market):
        seeded_market.exchange.set_fee(0, ADMIN)
        seeded_market.fund(BOB, base=10 * E18)

        out = seeded_market.exchange.swap_base_to_asset(DAI, 10 * E18, 0, BOB)

        assert out == 9090909090909090909

    def test_full_fee_quotes_nothing(self, seeded_market: Market):
        seeded_market.exchange.set_fee(1000, ADMIN)
        assert seeded_market.exchange.quote_base_to_asset(DAI, 10 * E18) == 0

    def test_higher_fee_pays_less(self, seeded_market: Market):
        low = seeded_market.exchange.quote_asset_to_base(DAI, 10 * E18)
        seeded_market.exchange.set_fee(30, ADMIN)
        assert seeded_market.exchange.quote_asset_to_base(DAI, 10 * E18) < low
