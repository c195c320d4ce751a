"""Pool record definition."""

from dataclasses import dataclass


@dataclass
class Pool:
    """Reserve pair and share supply for one asset against the base currency."""

    asset: str
    base_reserve: int = 0
    asset_reserve: int = 0
    share_supply: int = 0

    @property
    def is_active(self) -> bool:
        """True once bootstrapped and until the last share is burned."""
        return self.share_supply > 0

    @property
    def product(self) -> int:
        """Constant product k = base_reserve * asset_reserve."""
        return self.base_reserve * self.asset_reserve

    def get_reserves(self, base_in: bool) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if base_in:
            return self.base_reserve, self.asset_reserve
        return self.asset_reserve, self.base_reserve

    def set_reserves(self, base_in: bool, reserve_in: int, reserve_out: int) -> None:
        """Store reserves given in the same order get_reserves returns them."""
        if base_in:
            self.base_reserve, self.asset_reserve = reserve_in, reserve_out
        else:
            self.asset_reserve, self.base_reserve = reserve_in, reserve_out

    def is_consistent(self) -> bool:
        """Either fully empty or fully funded."""
        if self.share_supply == 0:
            return self.base_reserve == 0 and self.asset_reserve == 0
        return self.base_reserve > 0 and self.asset_reserve > 0


__all__ = ["Pool"]
