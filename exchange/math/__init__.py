"""Mathematical utilities for the exchange engine.

This package provides the integer primitives the pool math is built on:
- isqrt: Babylonian integer square root
- fee_amount / amount_after_fee: floor fee deduction in parts-per-thousand
"""

from exchange.math.fixed_point import amount_after_fee, fee_amount, isqrt, mul_div

__all__ = ["isqrt", "fee_amount", "amount_after_fee", "mul_div"]
