"""Result types produced by the pool math."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SwapQuote:
    """Priced single-pool swap leg."""

    amount_in: int
    amount_out: int
    # New reserves as (reserve_in, reserve_out) after the leg is applied
    reserve_in_after: int
    reserve_out_after: int


@dataclass(frozen=True)
class DepositQuote:
    """Computed effect of a deposit on one pool."""

    shares: int
    # Base actually added to the reserve (may be below what was sent)
    base_used: int
    asset_used: int
    refund: int
    bootstrap: bool


@dataclass(frozen=True)
class WithdrawQuote:
    """Computed effect of burning shares."""

    shares: int
    base_amount: int
    asset_amount: int
