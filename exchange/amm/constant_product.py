"""Constant product pricing: x * y = k.

The fee is deducted from the input in parts-per-thousand before pricing.
The whole undiscounted input is credited to the input reserve, so the fee
stays in the pool and k grows with every trade.
"""

from exchange.amm.base import SwapQuote
from exchange.constants import DEFAULT_FEE, FEE_DENOMINATOR
from exchange.math.fixed_point import amount_after_fee
from exchange.safe_int import UINT256_MAX, S


class ConstantProduct:
    """Constant product swap math.

    Formula: amount_out = in' * reserve_out / (reserve_in + in')
    where in' = in - floor(in * fee / 1000).
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee: int = DEFAULT_FEE,
    ) -> int:
        """Calculate output amount for an exact input.

        Args:
            amount_in: Input amount (full, before fee)
            reserve_in: Reserve of the input side
            reserve_out: Reserve of the output side
            fee: Fee in parts-per-thousand

        Returns:
            Output amount, floored
        """
        if amount_in <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0

        effective_in = S(amount_after_fee(amount_in, fee))
        numerator = effective_in * S(reserve_out)
        denominator = S(reserve_in) + effective_in

        return (numerator // denominator).value

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee: int = DEFAULT_FEE,
    ) -> int:
        """Calculate the input needed to receive at least amount_out.

        Rounds up so that get_amount_out(get_amount_in(y)) >= y.

        Args:
            amount_out: Desired output amount
            reserve_in: Reserve of the input side
            reserve_out: Reserve of the output side
            fee: Fee in parts-per-thousand

        Returns:
            Required input amount, or max uint256 when unreachable
        """
        if amount_out <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0
        if amount_out >= reserve_out or fee >= FEE_DENOMINATOR:
            return UINT256_MAX

        # Smallest effective input that prices to amount_out
        effective_in = (S(reserve_in) * S(amount_out)).ceiling_div(S(reserve_out) - S(amount_out))

        # Smallest gross input whose post-fee amount reaches effective_in
        amount_in = (effective_in * S(FEE_DENOMINATOR)).ceiling_div(S(FEE_DENOMINATOR - fee)).value
        while amount_in > 0 and amount_after_fee(amount_in - 1, fee) >= effective_in.value:
            amount_in -= 1
        while amount_after_fee(amount_in, fee) < effective_in.value:
            amount_in += 1
        return amount_in

    def simulate_swap(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee: int = DEFAULT_FEE,
    ) -> SwapQuote:
        """Price one leg and return the reserves it leaves behind.

        Args:
            amount_in: Amount credited to the input reserve
            reserve_in: Reserve of the input side
            reserve_out: Reserve of the output side
            fee: Fee in parts-per-thousand

        Returns:
            SwapQuote with output and post-trade reserves
        """
        amount_out = self.get_amount_out(amount_in, reserve_in, reserve_out, fee)
        return SwapQuote(
            amount_in=amount_in,
            amount_out=amount_out,
            reserve_in_after=(S(reserve_in) + S(amount_in)).to_uint256(),
            reserve_out_after=(S(reserve_out) - S(amount_out)).value,
        )


# Singleton instance
constant_product = ConstantProduct()


__all__ = ["ConstantProduct", "constant_product"]
