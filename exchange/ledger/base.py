"""Collaborator contracts the engine moves value through.

The engine never holds balances itself. Assets live on AssetLedgers (one per
asset handle) and the base currency on a single BaseLedger. Both are
journaled: the engine takes a checkpoint when an operation starts and rolls
every touched ledger back if the operation fails.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Protocol, runtime_checkable

import structlog

from exchange.errors import AssetTransferFailed, UnknownAsset
from exchange.models.types import normalize_handle

logger = structlog.get_logger()


@runtime_checkable
class Journaled(Protocol):
    """Ledger state that can be checkpointed and restored."""

    def checkpoint(self) -> Any:
        """Capture current state and return an opaque token."""
        ...

    def rollback(self, token: Any) -> None:
        """Restore the state captured by checkpoint()."""
        ...


@runtime_checkable
class AssetLedger(Journaled, Protocol):
    """Balance ledger for a single asset.

    transfer_from moves an owner's balance on the engine's behalf;
    transfer moves the sender's own balance. Both return False (or raise)
    on failure and may deliver less than amount for transfer-tax assets.
    """

    @property
    def address(self) -> str: ...

    def balance_of(self, holder: str) -> int: ...

    def transfer_from(self, owner: str, recipient: str, amount: int) -> bool: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...


@runtime_checkable
class BaseLedger(Journaled, Protocol):
    """Base-currency value-transfer primitive.

    send is atomic: it either delivers the full amount and returns True,
    or moves nothing and returns False.
    """

    def balance_of(self, holder: str) -> int: ...

    def send(self, sender: str, recipient: str, amount: int) -> bool: ...


AssetResolver = Callable[[str], AssetLedger]


class AssetDirectory:
    """Resolves asset handles to their ledgers.

    Usage:
        directory = AssetDirectory([dai_ledger, usdc_ledger])
        ledger = directory("0x6B17...")  # case-insensitive
    """

    def __init__(self, ledgers: Iterable[AssetLedger] = ()) -> None:
        self._ledgers: dict[str, AssetLedger] = {}
        for ledger in ledgers:
            self.register(ledger)

    def __contains__(self, asset: object) -> bool:
        return isinstance(asset, str) and normalize_handle(asset) in self._ledgers

    def __iter__(self) -> Iterator[AssetLedger]:
        return iter(self._ledgers.values())

    def register(self, ledger: AssetLedger) -> None:
        """Add or replace the ledger for ledger.address."""
        key = normalize_handle(ledger.address)
        if key in self._ledgers:
            logger.debug("asset_ledger_replaced", asset=key)
        self._ledgers[key] = ledger

    def __call__(self, asset: str) -> AssetLedger:
        """Get the ledger for an asset.

        Raises:
            UnknownAsset: If no ledger is registered for the handle
        """
        ledger = self._ledgers.get(normalize_handle(asset))
        if ledger is None:
            raise UnknownAsset(f"No ledger registered for asset {asset}")
        return ledger


def pull_asset(ledger: AssetLedger, owner: str, recipient: str, amount: int) -> int:
    """Pull amount from owner and return what recipient actually received.

    The declared amount is never trusted: the recipient's balance is sampled
    before and after the transfer and the observed delta is returned. Assets
    that withhold a transfer tax therefore credit only what arrived.

    Args:
        ledger: Ledger of the asset being pulled
        owner: Identity whose balance is debited
        recipient: Identity receiving the asset (the engine)
        amount: Amount requested from the owner

    Returns:
        Received amount (may be below amount)

    Raises:
        AssetTransferFailed: If the ledger reports failure or the recipient
            balance fell
    """
    before = ledger.balance_of(recipient)
    if not ledger.transfer_from(owner, recipient, amount):
        raise AssetTransferFailed(f"transfer_from {owner} of {amount} {ledger.address} failed")
    after = ledger.balance_of(recipient)
    if after < before:
        raise AssetTransferFailed(f"Balance of {recipient} fell during pull of {ledger.address}")
    received = after - before
    if received != amount:
        logger.debug(
            "transfer_tax_observed",
            asset=ledger.address,
            requested=amount,
            received=received,
        )
    return received


def push_asset(ledger: AssetLedger, sender: str, recipient: str, amount: int) -> None:
    """Send amount of an asset out of sender's balance.

    Raises:
        AssetTransferFailed: If the ledger reports failure
    """
    if not ledger.transfer(sender, recipient, amount):
        raise AssetTransferFailed(f"transfer of {amount} {ledger.address} to {recipient} failed")


__all__ = [
    "Journaled",
    "AssetLedger",
    "BaseLedger",
    "AssetResolver",
    "AssetDirectory",
    "pull_asset",
    "push_asset",
]
