"""Self-contained exchange backed by in-memory ledgers.

The HTTP service runs against a Sandbox so that assets can be listed and
accounts funded without any external chain.
"""

from __future__ import annotations

from functools import lru_cache

import structlog

from exchange.config import EngineConfig
from exchange.engine import Exchange
from exchange.errors import UnknownAsset
from exchange.ledger.base import AssetDirectory
from exchange.ledger.memory import InMemoryAssetLedger, InMemoryBaseLedger
from exchange.models.types import normalize_handle

logger = structlog.get_logger()


class Sandbox:
    """An Exchange wired to an in-memory base ledger and asset directory."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.base = InMemoryBaseLedger()
        self.assets = AssetDirectory()
        self._ledgers: dict[str, InMemoryAssetLedger] = {}
        self.exchange = Exchange(self.base, self.assets, config=config)

    def list_asset(self, address: str, transfer_tax: int = 0) -> InMemoryAssetLedger:
        """Create a ledger for a new asset, or return the existing one."""
        key = normalize_handle(address)
        ledger = self._ledgers.get(key)
        if ledger is None:
            ledger = InMemoryAssetLedger(address=key, transfer_tax=transfer_tax)
            self._ledgers[key] = ledger
            self.assets.register(ledger)
            logger.info("asset_listed", asset=key, transfer_tax=transfer_tax)
        return ledger

    def listed_assets(self) -> list[str]:
        return sorted(self._ledgers)

    def fund(self, holder: str, base_amount: int = 0, asset: str | None = None, asset_amount: int = 0) -> None:
        """Credit base currency and/or an asset to holder out of thin air.

        Raises:
            UnknownAsset: If asset has not been listed
        """
        ledger = None
        if asset is not None:
            ledger = self._ledgers.get(normalize_handle(asset))
            if ledger is None:
                raise UnknownAsset(f"Asset {asset} has not been listed")
        if base_amount:
            self.base.fund(holder, base_amount)
        if ledger is not None and asset_amount:
            ledger.mint(holder, asset_amount)
        logger.debug("account_funded", holder=holder, base=base_amount, asset=asset, amount=asset_amount)

    def balances(self, holder: str) -> dict[str, int]:
        """Base balance under "base" plus every listed asset balance."""
        result = {"base": self.base.balance_of(holder)}
        for key, ledger in self._ledgers.items():
            result[key] = ledger.balance_of(holder)
        return result


@lru_cache(maxsize=1)
def get_default_sandbox() -> Sandbox:
    """Process-wide sandbox configured from the environment."""
    return Sandbox(EngineConfig.from_env())
