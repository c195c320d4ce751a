"""Pool registry owning all reserve, supply and share-balance state.

Pools are keyed by normalized asset handle. A pool record is created the
first time a deposit touches the asset and is never removed; once its share
supply returns to zero it reads as uninitialized again.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass

import structlog

from exchange.errors import InsufficientShares, InvariantViolation
from exchange.models.types import normalize_handle
from exchange.pools.types import Pool
from exchange.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class RegistrySnapshot:
    """Opaque copy of registry state used to roll back an operation."""

    pools: dict[str, Pool]
    shares: dict[str, dict[str, int]]


class PoolRegistry:
    """Registry of pools and per-provider share balances.

    The registry only enforces bookkeeping rules (no negative balances,
    supply tracks the balance sum). Pricing and mint/burn rules live in
    exchange.amm; the engine decides when to call into the registry.
    """

    def __init__(self) -> None:
        self._pools: dict[str, Pool] = {}
        # asset -> provider -> shares
        self._shares: dict[str, dict[str, int]] = {}

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, asset: object) -> bool:
        return isinstance(asset, str) and normalize_handle(asset) in self._pools

    def __iter__(self) -> Iterator[Pool]:
        return iter(self._pools.values())

    def get_pool(self, asset: str) -> Pool | None:
        """Get the pool record for an asset, active or not.

        Args:
            asset: Asset handle (any case)

        Returns:
            Pool if the asset was ever deposited, None otherwise
        """
        return self._pools.get(normalize_handle(asset))

    def get_active_pool(self, asset: str) -> Pool | None:
        """Get the pool for an asset only if it has outstanding shares."""
        pool = self.get_pool(asset)
        if pool is None or not pool.is_active:
            return None
        return pool

    def get_or_create(self, asset: str) -> Pool:
        """Get the pool for an asset, creating an uninitialized record."""
        key = normalize_handle(asset)
        pool = self._pools.get(key)
        if pool is None:
            pool = Pool(asset=key)
            self._pools[key] = pool
            self._shares[key] = {}
            logger.debug("pool_created", asset=key)
        return pool

    def active_pools(self) -> list[Pool]:
        """All pools with a positive share supply."""
        return [pool for pool in self._pools.values() if pool.is_active]

    def share_balance(self, asset: str, provider: str) -> int:
        """Shares held by provider in the asset's pool (0 if none)."""
        return self._shares.get(normalize_handle(asset), {}).get(provider, 0)

    def providers(self, asset: str) -> dict[str, int]:
        """Copy of the non-zero share balances for a pool."""
        return dict(self._shares.get(normalize_handle(asset), {}))

    def mint_shares(self, pool: Pool, provider: str, amount: int) -> int:
        """Credit shares to provider and grow the pool's supply.

        Returns:
            Provider's new share balance
        """
        balances = self._shares.setdefault(pool.asset, {})
        new_balance = (S(balances.get(provider, 0)) + S(amount)).to_uint256()
        pool.share_supply = (S(pool.share_supply) + S(amount)).to_uint256()
        balances[provider] = new_balance
        return new_balance

    def burn_shares(self, pool: Pool, provider: str, amount: int) -> int:
        """Debit shares from provider and shrink the pool's supply.

        Returns:
            Provider's remaining share balance

        Raises:
            InsufficientShares: If provider holds fewer than amount
        """
        balances = self._shares.setdefault(pool.asset, {})
        held = balances.get(provider, 0)
        if held < amount:
            raise InsufficientShares(f"{provider} holds {held} shares, tried to burn {amount}")
        remaining = held - amount
        pool.share_supply = (S(pool.share_supply) - S(amount)).value
        if remaining:
            balances[provider] = remaining
        else:
            del balances[provider]
        return remaining

    def snapshot(self) -> RegistrySnapshot:
        """Capture all pool and share state."""
        return RegistrySnapshot(
            pools=copy.deepcopy(self._pools),
            shares=copy.deepcopy(self._shares),
        )

    def restore(self, snapshot: RegistrySnapshot) -> None:
        """Replace state with a previously captured snapshot.

        Pool objects are swapped out, so references taken before the restore
        must be looked up again.
        """
        self._pools = copy.deepcopy(snapshot.pools)
        self._shares = copy.deepcopy(snapshot.shares)

    def check_invariants(self) -> None:
        """Verify every pool's reserve/supply shape and share sums.

        Raises:
            InvariantViolation: On the first inconsistent pool
        """
        for asset, pool in self._pools.items():
            if not pool.is_consistent():
                raise InvariantViolation(
                    f"Pool {asset} is half-initialized: base={pool.base_reserve} "
                    f"asset={pool.asset_reserve} supply={pool.share_supply}"
                )
            total = sum(self._shares.get(asset, {}).values())
            if total != pool.share_supply:
                raise InvariantViolation(
                    f"Pool {asset} share balances sum to {total}, supply is {pool.share_supply}"
                )


__all__ = ["PoolRegistry", "RegistrySnapshot"]
