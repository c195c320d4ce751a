"""Pool math: constant product pricing and liquidity share accounting."""

from exchange.amm.base import DepositQuote, SwapQuote, WithdrawQuote
from exchange.amm.constant_product import ConstantProduct, constant_product
from exchange.amm.liquidity import compute_deposit, compute_withdraw, required_base

__all__ = [
    "ConstantProduct",
    "constant_product",
    "SwapQuote",
    "DepositQuote",
    "WithdrawQuote",
    "compute_deposit",
    "compute_withdraw",
    "required_base",
]
