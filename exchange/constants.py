"""Protocol constants for the exchange engine.

Centralizes fee bounds and well-known identities.
"""

# Fees are expressed in parts-per-thousand of the input amount
FEE_DENOMINATOR = 1000

# 3/1000 = 0.3%, the historical fixed fee
DEFAULT_FEE = 3

# Upper bound is inclusive: a 1000/1000 fee swallows the whole input
MAX_FEE = FEE_DENOMINATOR

# Identity the engine holds balances under when none is configured
DEFAULT_EXCHANGE_ADDRESS = "0x0000000000000000000000000000000000e0c4a1"

# Initializing identity when none is configured
DEFAULT_ADMIN = "0x00000000000000000000000000000000000ad111"
