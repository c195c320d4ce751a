"""Integer helpers for pool math.

All results round toward zero (floor for the non-negative values used here),
which biases every trade and every mint/burn fractionally in the pool's favor.
"""

from exchange.constants import FEE_DENOMINATOR
from exchange.safe_int import S, SafeInt


def isqrt(value: int) -> int:
    """Integer square root by the Babylonian method.

    Returns floor(sqrt(value)). Matches the iteration used by on-chain
    exchanges so results agree bit-for-bit for any uint256 input.

    Args:
        value: Non-negative integer

    Returns:
        Largest integer r with r * r <= value

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"isqrt of negative value: {value}")
    if value > 3:
        z = value
        x = value // 2 + 1
        while x < z:
            z = x
            x = (value // x + x) // 2
        return z
    if value != 0:
        return 1
    return 0


def fee_amount(amount: int, fee: int) -> int:
    """Fee withheld from an input amount: floor(amount * fee / 1000)."""
    return (S(amount) * S(fee) // S(FEE_DENOMINATOR)).value


def amount_after_fee(amount: int, fee: int) -> int:
    """Input credited to pricing after the fee: amount - floor(amount * fee / 1000)."""
    return (S(amount) - S(fee_amount(amount, fee))).value


def mul_div(a: int | SafeInt, b: int | SafeInt, denominator: int | SafeInt) -> int:
    """floor(a * b / denominator) with checked division."""
    return (S(a) * S(b) // S(denominator)).value


__all__ = ["isqrt", "fee_amount", "amount_after_fee", "mul_div"]
