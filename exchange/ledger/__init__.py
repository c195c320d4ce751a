"""Ledger collaborators: contracts, reconciliation helpers, in-memory ledgers."""

from exchange.ledger.base import (
    AssetDirectory,
    AssetLedger,
    AssetResolver,
    BaseLedger,
    Journaled,
    pull_asset,
    push_asset,
)
from exchange.ledger.memory import InMemoryAssetLedger, InMemoryBaseLedger

__all__ = [
    "AssetDirectory",
    "AssetLedger",
    "AssetResolver",
    "BaseLedger",
    "Journaled",
    "pull_asset",
    "push_asset",
    "InMemoryAssetLedger",
    "InMemoryBaseLedger",
]
