"""Exchange engine: deposits, withdrawals and swaps against per-asset pools.

Every public mutating operation follows the same shape:
1. Enter the reentrancy guard and checkpoint engine and ledger state
2. Check preconditions and resolve pools
3. Pull inputs (assets are reconciled by observed balance delta)
4. Compute deltas and check economic limits
5. Mutate reserves, supply and share balances
6. Push outputs to the caller
7. Publish one event record

Any exception in steps 2-6 restores the checkpoint and propagates.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from exchange.access import Permissions, ReentrancyGuard
from exchange.amm.constant_product import ConstantProduct, constant_product
from exchange.amm.liquidity import compute_deposit, compute_withdraw, required_base
from exchange.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from exchange.constants import MAX_FEE
from exchange.errors import (
    BaseTransferFailed,
    FeeOutOfRange,
    IdenticalAssets,
    InsufficientOutputAmount,
    InsufficientShares,
    InvalidAmount,
    PoolNotFound,
)
from exchange.event_log import EventLog
from exchange.ledger.base import AssetResolver, BaseLedger, Journaled, pull_asset, push_asset
from exchange.models.events import (
    AssetSwapped,
    ExchangeEvent,
    FeeChanged,
    LiquidityAdded,
    LiquidityRemoved,
    Swapped,
    SwapSide,
)
from exchange.models.types import normalize_handle
from exchange.pools.registry import PoolRegistry
from exchange.pools.types import Pool
from exchange.safe_int import UINT256_MAX, S

logger = structlog.get_logger()


class _Operation:
    """State captured for one in-flight public operation."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.checkpoints: list[tuple[Journaled, Any]] = []
        self.pending: list[ExchangeEvent] = []

    def track(self, ledger: Journaled) -> Any:
        """Checkpoint a ledger before the operation first touches it."""
        if not any(tracked is ledger for tracked, _ in self.checkpoints):
            self.checkpoints.append((ledger, ledger.checkpoint()))
        return ledger

    def emit(self, event: ExchangeEvent) -> None:
        self.pending.append(event)

    def rollback(self) -> None:
        for ledger, token in reversed(self.checkpoints):
            ledger.rollback(token)


class Exchange:
    """Constant-product exchange over per-asset pools against one base currency.

    Args:
        base_ledger: Base-currency primitive the engine sends and receives through
        assets: Resolves an asset handle to its ledger
        config: Engine identity, admin identity and initial fee
        amm: Pricing math (default: shared ConstantProduct instance)
        events: Sink for emitted records (default: a fresh EventLog)
    """

    def __init__(
        self,
        base_ledger: BaseLedger,
        assets: AssetResolver,
        config: EngineConfig | None = None,
        amm: ConstantProduct | None = None,
        events: EventLog | None = None,
    ) -> None:
        self.config = config or DEFAULT_ENGINE_CONFIG
        self.address = self.config.address
        self.events = events if events is not None else EventLog()
        self._base = base_ledger
        self._assets = assets
        self._amm = amm or constant_product
        self._fee = self.config.fee
        self._permissions = Permissions(self.config.admin)
        self._guard = ReentrancyGuard()
        self._registry = PoolRegistry()

    # --- Views ---

    @property
    def fee(self) -> int:
        """Current fee in parts-per-thousand."""
        return self._fee

    def has_permission(self, identity: str) -> bool:
        return self._permissions.has_permission(identity)

    def get_pool(self, asset: str) -> Pool | None:
        """Copy of the pool record for an asset, or None if never deposited."""
        pool = self._registry.get_pool(asset)
        return dataclasses.replace(pool) if pool is not None else None

    def pools(self) -> list[Pool]:
        """Copies of all active pools."""
        return [dataclasses.replace(pool) for pool in self._registry.active_pools()]

    def share_balance_of(self, asset: str, provider: str) -> int:
        return self._registry.share_balance(asset, provider)

    def share_holders(self, asset: str) -> dict[str, int]:
        """Provider -> share balance for every current holder of the pool."""
        return self._registry.providers(asset)

    def total_shares(self, asset: str) -> int:
        pool = self._registry.get_pool(asset)
        return pool.share_supply if pool is not None else 0

    def check_invariants(self) -> None:
        """Raise InvariantViolation if any pool is inconsistent."""
        self._registry.check_invariants()

    def quote_base_to_asset(self, asset: str, base_amount: int) -> int:
        """Asset the matching swap would pay for base_amount.

        Raises:
            PoolNotFound: If the pool is not active
        """
        pool = self._require_active(asset)
        return self._amm.get_amount_out(base_amount, *pool.get_reserves(base_in=True), self._fee)

    def quote_asset_to_base(self, asset: str, asset_amount: int) -> int:
        """Base the matching swap would pay for asset_amount, assuming full delivery."""
        pool = self._require_active(asset)
        return self._amm.get_amount_out(asset_amount, *pool.get_reserves(base_in=False), self._fee)

    def quote_asset_to_asset(self, asset_in: str, asset_out: str, amount_in: int) -> int:
        """Final output of the two-hop swap, fee charged on both legs."""
        pool_in, pool_out = self._require_pair(asset_in, asset_out)
        base_out = self._amm.get_amount_out(amount_in, *pool_in.get_reserves(base_in=False), self._fee)
        return self._amm.get_amount_out(base_out, *pool_out.get_reserves(base_in=True), self._fee)

    def quote_deposit(self, asset: str, asset_amount: int) -> int | None:
        """Base required alongside asset_amount, or None if the pool is empty."""
        pool = self._registry.get_active_pool(asset)
        if pool is None:
            return None
        return required_base(asset_amount, pool.base_reserve, pool.asset_reserve)

    # --- Liquidity ---

    def deposit(self, asset: str, base_amount: int, asset_amount: int, caller: str) -> int:
        """Deposit base and asset, minting liquidity shares.

        The first deposit into an empty pool mints isqrt(base * asset) and sets
        the price. Later deposits mint in proportion to the asset received and
        refund base sent above the required amount.

        Args:
            asset: Asset handle
            base_amount: Base currency sent (upper bound on what is used)
            asset_amount: Asset amount to pull from the caller
            caller: Depositing identity

        Returns:
            Shares minted
        """
        with self._operation("deposit") as op:
            _require_amount("base_amount", base_amount)
            _require_amount("asset_amount", asset_amount)
            ledger = op.track(self._assets(asset))

            self._receive_base(caller, base_amount)
            received = pull_asset(ledger, caller, self.address, asset_amount)

            pool = self._registry.get_or_create(asset)
            quote = compute_deposit(pool, base_amount, received)

            pool.base_reserve = (S(pool.base_reserve) + S(quote.base_used)).to_uint256()
            pool.asset_reserve = (S(pool.asset_reserve) + S(quote.asset_used)).to_uint256()
            share_balance = self._registry.mint_shares(pool, caller, quote.shares)
            if quote.bootstrap:
                logger.info(
                    "pool_bootstrapped",
                    asset=pool.asset,
                    base_reserve=pool.base_reserve,
                    asset_reserve=pool.asset_reserve,
                    shares=quote.shares,
                )

            self._send_base(caller, quote.refund)

            op.emit(
                LiquidityAdded(
                    provider=caller,
                    asset=pool.asset,
                    base_amount=quote.base_used,
                    asset_amount=quote.asset_used,
                    share_balance=share_balance,
                )
            )
        return quote.shares

    def withdraw(self, asset: str, share_amount: int, caller: str) -> tuple[int, int]:
        """Burn shares for a proportional slice of both reserves.

        Returns:
            Tuple of (base_amount, asset_amount) paid to the caller
        """
        with self._operation("withdraw") as op:
            _require_amount("share_amount", share_amount)
            held = self._registry.share_balance(asset, caller)
            if held < share_amount:
                raise InsufficientShares(f"{caller} holds {held} shares of {asset}, requested {share_amount}")
            pool = self._require_active(asset)
            ledger = op.track(self._assets(asset))

            quote = compute_withdraw(pool, share_amount)

            pool.base_reserve = (S(pool.base_reserve) - S(quote.base_amount)).value
            pool.asset_reserve = (S(pool.asset_reserve) - S(quote.asset_amount)).value
            self._registry.burn_shares(pool, caller, share_amount)

            self._send_base(caller, quote.base_amount)
            push_asset(ledger, self.address, caller, quote.asset_amount)

            op.emit(
                LiquidityRemoved(
                    provider=caller,
                    asset=pool.asset,
                    base_amount=quote.base_amount,
                    asset_amount=quote.asset_amount,
                    shares_burned=share_amount,
                )
            )
        return quote.base_amount, quote.asset_amount

    # --- Swaps ---

    def swap_base_to_asset(self, asset: str, base_amount: int, min_out: int, caller: str) -> int:
        """Sell base currency for an asset.

        Returns:
            Asset amount paid to the caller
        """
        with self._operation("swap_base_to_asset") as op:
            _require_amount("base_amount", base_amount)
            _require_amount("min_out", min_out, allow_zero=True)
            pool = self._require_active(asset)
            ledger = op.track(self._assets(asset))

            quote = self._amm.simulate_swap(base_amount, *pool.get_reserves(base_in=True), self._fee)
            _check_slippage(quote.amount_out, min_out)

            self._receive_base(caller, base_amount)
            pool.set_reserves(True, quote.reserve_in_after, quote.reserve_out_after)

            push_asset(ledger, self.address, caller, quote.amount_out)

            op.emit(
                Swapped(
                    caller=caller,
                    asset=pool.asset,
                    side=SwapSide.BASE_TO_ASSET,
                    amount_in=base_amount,
                    amount_out=quote.amount_out,
                )
            )
        return quote.amount_out

    def swap_asset_to_base(self, asset: str, asset_amount: int, min_out: int, caller: str) -> int:
        """Sell an asset for base currency.

        Pricing uses the amount the pool actually received.

        Returns:
            Base amount paid to the caller
        """
        with self._operation("swap_asset_to_base") as op:
            _require_amount("asset_amount", asset_amount)
            _require_amount("min_out", min_out, allow_zero=True)
            pool = self._require_active(asset)
            ledger = op.track(self._assets(asset))

            received = pull_asset(ledger, caller, self.address, asset_amount)
            quote = self._amm.simulate_swap(received, *pool.get_reserves(base_in=False), self._fee)
            _check_slippage(quote.amount_out, min_out)

            pool.set_reserves(False, quote.reserve_in_after, quote.reserve_out_after)

            self._send_base(caller, quote.amount_out)

            op.emit(
                Swapped(
                    caller=caller,
                    asset=pool.asset,
                    side=SwapSide.ASSET_TO_BASE,
                    amount_in=received,
                    amount_out=quote.amount_out,
                )
            )
        return quote.amount_out

    def swap_asset_to_asset(
        self,
        asset_in: str,
        asset_out: str,
        amount_in: int,
        min_out: int,
        caller: str,
    ) -> int:
        """Swap one asset for another through the base currency.

        Leg 1 sells asset_in for base against asset_in's pool; leg 2 buys
        asset_out with that base against asset_out's pool. The fee is charged
        on each leg. min_out is checked once against the final output.

        Returns:
            asset_out amount paid to the caller
        """
        with self._operation("swap_asset_to_asset") as op:
            _require_amount("amount_in", amount_in)
            _require_amount("min_out", min_out, allow_zero=True)
            pool_in, pool_out = self._require_pair(asset_in, asset_out)
            ledger_in = op.track(self._assets(asset_in))
            ledger_out = op.track(self._assets(asset_out))

            received = pull_asset(ledger_in, caller, self.address, amount_in)
            first = self._amm.simulate_swap(received, *pool_in.get_reserves(base_in=False), self._fee)
            second = self._amm.simulate_swap(
                first.amount_out, *pool_out.get_reserves(base_in=True), self._fee
            )
            _check_slippage(second.amount_out, min_out)

            pool_in.set_reserves(False, first.reserve_in_after, first.reserve_out_after)
            pool_out.set_reserves(True, second.reserve_in_after, second.reserve_out_after)

            push_asset(ledger_out, self.address, caller, second.amount_out)

            logger.debug(
                "two_hop_route",
                asset_in=pool_in.asset,
                asset_out=pool_out.asset,
                base_intermediate=first.amount_out,
            )
            op.emit(
                AssetSwapped(
                    caller=caller,
                    asset_in=pool_in.asset,
                    asset_out=pool_out.asset,
                    amount_in=received,
                    amount_out=second.amount_out,
                )
            )
        return second.amount_out

    # --- Administration ---

    def set_fee(self, new_fee: int, caller: str) -> None:
        """Update the fee shared by every pool.

        Raises:
            Unauthorized: If caller lacks the administrative permission
            FeeOutOfRange: If new_fee is outside [0, 1000]
        """
        with self._operation("set_fee") as op:
            self._permissions.require(caller)
            if isinstance(new_fee, bool) or not isinstance(new_fee, int) or not 0 <= new_fee <= MAX_FEE:
                raise FeeOutOfRange(f"Fee {new_fee!r} outside [0, {MAX_FEE}]")
            self._fee = new_fee
            op.emit(FeeChanged(new_fee=new_fee))

    # --- Internals ---

    @contextmanager
    def _operation(self, name: str) -> Iterator[_Operation]:
        """Exclusive, atomic section for one public operation.

        Events are published only after the section exits cleanly.
        """
        with self._guard.enter(name):
            op = _Operation(name)
            snapshot = self._registry.snapshot()
            fee = self._fee
            op.track(self._base)
            try:
                yield op
            except Exception as exc:
                self._registry.restore(snapshot)
                self._fee = fee
                op.rollback()
                logger.info(
                    "operation_rolled_back",
                    operation=name,
                    reason=getattr(exc, "reason", type(exc).__name__),
                    error=str(exc),
                )
                raise
        for event in op.pending:
            self.events.publish(event)

    def _require_active(self, asset: str) -> Pool:
        pool = self._registry.get_active_pool(asset)
        if pool is None:
            raise PoolNotFound(f"No active pool for asset {asset}")
        return pool

    def _require_pair(self, asset_in: str, asset_out: str) -> tuple[Pool, Pool]:
        if normalize_handle(asset_in) == normalize_handle(asset_out):
            raise IdenticalAssets(f"Cannot swap {asset_in} for itself")
        return self._require_active(asset_in), self._require_active(asset_out)

    def _receive_base(self, caller: str, amount: int) -> None:
        if not self._base.send(caller, self.address, amount):
            raise BaseTransferFailed(f"Could not collect {amount} base from {caller}")

    def _send_base(self, recipient: str, amount: int) -> None:
        if amount == 0:
            return
        if not self._base.send(self.address, recipient, amount):
            raise BaseTransferFailed(f"Could not send {amount} base to {recipient}")


def _require_amount(name: str, value: int, *, allow_zero: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX or (value == 0 and not allow_zero):
        raise InvalidAmount(f"{name} out of range: {value}")


def _check_slippage(amount_out: int, min_out: int) -> None:
    if amount_out < min_out:
        raise InsufficientOutputAmount(f"Output {amount_out} below minimum {min_out}")


__all__ = ["Exchange"]
