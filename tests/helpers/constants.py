"""Shared identities and amounts for tests.

All handles are lowercase for consistency with normalize_handle().

Usage:
    from tests.helpers import DAI, ALICE, E18
"""

# =============================================================================
# Engine identities
# =============================================================================

ENGINE = "0x0000000000000000000000000000000000e0c4a1"
ADMIN = "0x00000000000000000000000000000000000ad111"

# =============================================================================
# Providers and traders
# =============================================================================

ALICE = "0xa11ce00000000000000000000000000000000001"
BOB = "0xb0b0000000000000000000000000000000000002"
CAROL = "0xca40100000000000000000000000000000000003"

# =============================================================================
# Assets
# =============================================================================

DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
# Fee-on-transfer asset used for reconciliation tests
TAXED = "0x7a7a7a7a7a7a7a7a7a7a7a7a7a7a7a7a7a7a7a7a"

# =============================================================================
# Amounts
# =============================================================================

E18 = 10**18


__all__ = ["ENGINE", "ADMIN", "ALICE", "BOB", "CAROL", "DAI", "USDC", "TAXED", "E18"]
