"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Identities, asset handles and common amounts
- factories: Exchange wiring over in-memory ledgers
"""

from tests.helpers.constants import ADMIN, ALICE, BOB, CAROL, DAI, E18, ENGINE, TAXED, USDC
from tests.helpers.factories import Market, make_market

__all__ = [
    # Constants
    "ENGINE",
    "ADMIN",
    "ALICE",
    "BOB",
    "CAROL",
    "DAI",
    "USDC",
    "TAXED",
    "E18",
    # Factories
    "Market",
    "make_market",
]
