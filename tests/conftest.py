"""Pytest configuration and fixtures."""

import pytest

from tests.helpers import DAI, E18, TAXED, USDC, Market, make_market


@pytest.fixture
def market() -> Market:
    """Exchange at the default fee with DAI and USDC listed, no pools yet."""
    return make_market()


@pytest.fixture
def seeded_market(market: Market) -> Market:
    """Market with DAI and USDC pools bootstrapped at 100e18 / 100e18."""
    market.seed(DAI, 100 * E18, 100 * E18)
    market.seed(USDC, 100 * E18, 100 * E18)
    return market


@pytest.fixture
def taxed_market() -> Market:
    """Market listing a 1% fee-on-transfer asset next to DAI."""
    return make_market(assets=(DAI, TAXED), transfer_tax={TAXED: 10})
