"""Liquidity share accounting.

Mint rules:
- Bootstrap (empty pool): shares = isqrt(base * asset); the deposit sets the
  initial exchange rate.
- Proportional (active pool): the asset amount fixes the deposit; the base
  side must cover floor(asset * base_reserve / asset_reserve) and any excess
  is refunded.

Burn rule: each side is paid floor(shares * reserve / supply).
"""

from exchange.amm.base import DepositQuote, WithdrawQuote
from exchange.errors import (
    InsufficientBaseSent,
    InsufficientInitialLiquidity,
    InsufficientReserves,
    InsufficientSharesMinted,
)
from exchange.math.fixed_point import isqrt, mul_div
from exchange.pools.types import Pool
from exchange.safe_int import S


def required_base(asset_amount: int, base_reserve: int, asset_reserve: int) -> int:
    """Base needed alongside asset_amount to keep the pool ratio."""
    return mul_div(asset_amount, base_reserve, asset_reserve)


def compute_deposit(pool: Pool, base_sent: int, asset_received: int) -> DepositQuote:
    """Compute shares minted and reserve deltas for a deposit.

    Args:
        pool: Pool receiving the deposit (not mutated)
        base_sent: Base currency sent by the provider
        asset_received: Asset amount the pool actually received

    Returns:
        DepositQuote describing the mint

    Raises:
        InsufficientInitialLiquidity: Bootstrap would mint zero shares
        InsufficientBaseSent: base_sent is below the required base
        InsufficientSharesMinted: Proportional deposit would mint zero shares
    """
    if pool.share_supply == 0:
        shares = isqrt((S(base_sent) * S(asset_received)).value)
        if shares == 0:
            raise InsufficientInitialLiquidity(
                f"Bootstrap deposit of {base_sent} base / {asset_received} asset mints no shares"
            )
        return DepositQuote(
            shares=shares,
            base_used=base_sent,
            asset_used=asset_received,
            refund=0,
            bootstrap=True,
        )

    base_needed = required_base(asset_received, pool.base_reserve, pool.asset_reserve)
    if base_sent < base_needed:
        raise InsufficientBaseSent(f"Deposit requires {base_needed} base, got {base_sent}")

    shares = mul_div(asset_received, pool.share_supply, pool.asset_reserve)
    if shares == 0:
        raise InsufficientSharesMinted(f"Deposit of {asset_received} asset mints no shares")

    return DepositQuote(
        shares=shares,
        base_used=base_needed,
        asset_used=asset_received,
        refund=(S(base_sent) - S(base_needed)).value,
        bootstrap=False,
    )


def compute_withdraw(pool: Pool, shares: int) -> WithdrawQuote:
    """Compute the reserve slice redeemed by burning shares.

    Raises:
        InsufficientReserves: Either side would redeem zero
    """
    base_amount = mul_div(shares, pool.base_reserve, pool.share_supply)
    asset_amount = mul_div(shares, pool.asset_reserve, pool.share_supply)
    if base_amount == 0 or asset_amount == 0:
        raise InsufficientReserves(
            f"Burning {shares} shares redeems {base_amount} base / {asset_amount} asset"
        )
    return WithdrawQuote(shares=shares, base_amount=base_amount, asset_amount=asset_amount)


__all__ = ["required_base", "compute_deposit", "compute_withdraw"]
