"""Tests for the in-memory Sandbox."""

import pytest

from exchange.config import EngineConfig
from exchange.errors import UnknownAsset
from exchange.sandbox import Sandbox
from tests.helpers import ADMIN, ALICE, DAI, E18, ENGINE, TAXED, USDC


@pytest.fixture
def sandbox() -> Sandbox:
    return Sandbox(EngineConfig(address=ENGINE, admin=ADMIN))


class TestListing:
    def test_list_asset_normalizes_handle(self, sandbox: Sandbox):
        ledger = sandbox.list_asset(DAI.upper().replace("0X", "0x"))
        assert ledger.address == DAI
        assert sandbox.listed_assets() == [DAI]
        assert DAI in sandbox.assets

    def test_listing_twice_returns_same_ledger(self, sandbox: Sandbox):
        first = sandbox.list_asset(DAI)
        assert sandbox.list_asset(DAI, transfer_tax=50) is first
        assert first.transfer_tax == 0

    def test_taxed_listing(self, sandbox: Sandbox):
        assert sandbox.list_asset(TAXED, transfer_tax=10).transfer_tax == 10


class TestFunding:
    def test_fund_and_balances(self, sandbox: Sandbox):
        sandbox.list_asset(DAI)
        sandbox.list_asset(USDC)
        sandbox.fund(ALICE, base_amount=5 * E18, asset=DAI, asset_amount=7 * E18)

        assert sandbox.balances(ALICE) == {"base": 5 * E18, DAI: 7 * E18, USDC: 0}

    def test_fund_unlisted_asset_changes_nothing(self, sandbox: Sandbox):
        with pytest.raises(UnknownAsset):
            sandbox.fund(ALICE, base_amount=E18, asset=DAI, asset_amount=E18)
        assert sandbox.balances(ALICE) == {"base": 0}


class TestExchangeWiring:
    def test_listed_asset_can_be_pooled(self, sandbox: Sandbox):
        sandbox.list_asset(DAI)
        sandbox.fund(ALICE, base_amount=4 * E18, asset=DAI, asset_amount=E18)

        shares = sandbox.exchange.deposit(DAI, 4 * E18, E18, ALICE)

        assert shares == 2 * E18
        assert sandbox.balances(ENGINE) == {"base": 4 * E18, DAI: E18}
