"""Tests for Exchange.deposit."""

import pytest

from exchange.errors import (
    AssetTransferFailed,
    BaseTransferFailed,
    InsufficientBaseSent,
    InsufficientInitialLiquidity,
    InsufficientSharesMinted,
    ExchangeError,
    InvalidAmount,
    InvalidHandle,
    UnknownAsset,
)
from exchange.models import LiquidityAdded
from exchange.pools import Pool
from tests.helpers import ALICE, BOB, DAI, E18, ENGINE, TAXED, Market, make_market


class TestBootstrap:
    """First deposit into an empty pool."""

    def test_mints_isqrt_of_product(self, market: Market):
        shares = market.seed(DAI, 100 * E18, 400 * E18)

        assert shares == 200 * E18
        assert market.exchange.get_pool(DAI) == Pool(
            asset=DAI,
            base_reserve=100 * E18,
            asset_reserve=400 * E18,
            share_supply=200 * E18,
        )
        assert market.exchange.share_balance_of(DAI, ALICE) == 200 * E18
        assert market.exchange.total_shares(DAI) == 200 * E18

    def test_moves_funds_to_engine(self, market: Market):
        market.seed(DAI, 100 * E18, 400 * E18)

        assert market.base.balance_of(ALICE) == 0
        assert market.base.balance_of(ENGINE) == 100 * E18
        assert market.ledger(DAI).balance_of(ALICE) == 0
        assert market.ledger(DAI).balance_of(ENGINE) == 400 * E18

    def test_emits_liquidity_added(self, market: Market):
        market.seed(DAI, 100 * E18, 400 * E18)

        assert market.exchange.events.records == [
            LiquidityAdded(
                provider=ALICE,
                asset=DAI,
                base_amount=100 * E18,
                asset_amount=400 * E18,
                share_balance=200 * E18,
            )
        ]

    def test_handle_case_does_not_matter(self, market: Market):
        market.fund(ALICE, base=4, assets={DAI: 9})
        market.exchange.deposit(DAI.upper().replace("0X", "0x"), 4, 9, ALICE)

        assert market.exchange.share_balance_of(DAI, ALICE) == 6
        assert market.exchange.events.records[0].asset == DAI

    def test_zero_received_mints_nothing(self):
        """An asset that withholds everything in transit cannot bootstrap."""
        market = make_market(assets=(TAXED,), transfer_tax={TAXED: 1000})
        market.fund(ALICE, base=10 * E18, assets={TAXED: 10 * E18})
        before = market.state()

        with pytest.raises(InsufficientInitialLiquidity):
            market.exchange.deposit(TAXED, 10 * E18, 10 * E18, ALICE)

        assert market.state() == before
        assert market.exchange.get_pool(TAXED) is None

    def test_pool_absent_before_any_deposit(self, market: Market):
        assert market.exchange.get_pool(DAI) is None
        assert market.exchange.pools() == []
        assert market.exchange.quote_deposit(DAI, E18) is None


class TestProportionalDeposit:
    """Deposits into a pool at 100e18 base / 400e18 asset, 200e18 shares."""

    @pytest.fixture
    def pool_market(self, market: Market) -> Market:
        market.seed(DAI, 100 * E18, 400 * E18)
        return market

    def test_refunds_excess_base(self, pool_market: Market):
        pool_market.fund(BOB, base=15 * E18, assets={DAI: 40 * E18})

        shares = pool_market.exchange.deposit(DAI, 15 * E18, 40 * E18, BOB)

        assert shares == 20 * E18
        assert pool_market.base.balance_of(BOB) == 5 * E18
        pool = pool_market.exchange.get_pool(DAI)
        assert (pool.base_reserve, pool.asset_reserve, pool.share_supply) == (110 * E18, 440 * E18, 220 * E18)

    def test_event_records_base_used(self, pool_market: Market):
        pool_market.fund(BOB, base=15 * E18, assets={DAI: 40 * E18})
        pool_market.exchange.deposit(DAI, 15 * E18, 40 * E18, BOB)

        event = pool_market.exchange.events.records[-1]
        assert event == LiquidityAdded(
            provider=BOB,
            asset=DAI,
            base_amount=10 * E18,
            asset_amount=40 * E18,
            share_balance=20 * E18,
        )

    def test_share_balance_is_cumulative(self, pool_market: Market):
        pool_market.fund(ALICE, base=10 * E18, assets={DAI: 40 * E18})
        pool_market.exchange.deposit(DAI, 10 * E18, 40 * E18, ALICE)

        assert pool_market.exchange.events.records[-1].share_balance == 220 * E18

    def test_quote_deposit(self, pool_market: Market):
        assert pool_market.exchange.quote_deposit(DAI, 40 * E18) == 10 * E18

    def test_short_base_rejected(self, pool_market: Market):
        pool_market.fund(BOB, base=9 * E18, assets={DAI: 40 * E18})
        before = pool_market.state()

        with pytest.raises(InsufficientBaseSent):
            pool_market.exchange.deposit(DAI, 9 * E18, 40 * E18, BOB)

        assert pool_market.state() == before
        assert len(pool_market.exchange.events) == 1

    def test_dust_deposit_rejected(self, market: Market):
        market.seed(DAI, 1, 10**6)
        market.fund(BOB, base=1, assets={DAI: 999})
        before = market.state()

        with pytest.raises(InsufficientSharesMinted):
            market.exchange.deposit(DAI, 1, 999, BOB)

        assert market.state() == before


class TestDepositPreconditions:
    @pytest.mark.parametrize(
        "base_amount,asset_amount",
        [(0, E18), (E18, 0), (-1, E18), (True, E18), (E18, 1.5)],
    )
    def test_invalid_amounts(self, market: Market, base_amount, asset_amount):
        market.fund(ALICE, base=10 * E18, assets={DAI: 10 * E18})
        before = market.state()

        with pytest.raises(InvalidAmount):
            market.exchange.deposit(DAI, base_amount, asset_amount, ALICE)

        assert market.state() == before

    def test_unknown_asset(self, market: Market):
        market.fund(ALICE, base=E18)
        with pytest.raises(UnknownAsset):
            market.exchange.deposit("0x00000000000000000000000000000000000000aa", E18, E18, ALICE)
        assert market.base.balance_of(ALICE) == E18

    @pytest.mark.parametrize("handle", ["", "  ", "\t"])
    def test_blank_handle(self, market: Market, handle: str):
        market.fund(ALICE, base=E18, assets={DAI: E18})
        before = market.state()

        with pytest.raises(InvalidHandle) as exc_info:
            market.exchange.deposit(handle, E18, E18, ALICE)

        assert isinstance(exc_info.value, ExchangeError)
        assert market.state() == before
        assert market.exchange.events.records == []

    def test_base_not_available(self, market: Market):
        market.fund(ALICE, assets={DAI: E18})
        with pytest.raises(BaseTransferFailed):
            market.exchange.deposit(DAI, E18, E18, ALICE)
        assert market.exchange.get_pool(DAI) is None

    def test_asset_not_available_returns_base(self, market: Market):
        market.fund(ALICE, base=E18)
        before = market.state()

        with pytest.raises(AssetTransferFailed):
            market.exchange.deposit(DAI, E18, E18, ALICE)

        assert market.state() == before
        assert market.base.balance_of(ALICE) == E18
