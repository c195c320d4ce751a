"""Pydantic models for records emitted by completed operations.

One record is published per successful deposit, withdrawal, swap or fee
change. Failed operations publish nothing. Amounts are Python ints in
memory and decimal strings on the wire.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, field_serializer

NonNegative = Annotated[int, Field(ge=0)]


class SwapSide(str, Enum):
    """Direction of a single-pool swap."""

    BASE_TO_ASSET = "base_to_asset"
    ASSET_TO_BASE = "asset_to_base"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    @field_serializer(
        "base_amount",
        "asset_amount",
        "share_balance",
        "shares_burned",
        "amount_in",
        "amount_out",
        when_used="json",
        check_fields=False,
    )
    def _serialize_amount(self, value: int) -> str:
        return str(value)


class LiquidityAdded(_Record):
    """Shares minted against a deposit."""

    kind: Literal["liquidity_added"] = "liquidity_added"
    provider: str
    asset: str
    base_amount: NonNegative
    asset_amount: NonNegative
    share_balance: NonNegative = Field(description="Provider's cumulative share balance after the deposit.")


class LiquidityRemoved(_Record):
    """Shares burned for a reserve slice."""

    kind: Literal["liquidity_removed"] = "liquidity_removed"
    provider: str
    asset: str
    base_amount: NonNegative
    asset_amount: NonNegative
    shares_burned: NonNegative


class Swapped(_Record):
    """Single-pool swap between the base currency and an asset."""

    kind: Literal["swapped"] = "swapped"
    caller: str
    asset: str
    side: SwapSide
    amount_in: NonNegative
    amount_out: NonNegative


class AssetSwapped(_Record):
    """Two-hop swap from one asset to another through the base currency."""

    kind: Literal["asset_swapped"] = "asset_swapped"
    caller: str
    asset_in: str
    asset_out: str
    amount_in: NonNegative
    amount_out: NonNegative


class FeeChanged(_Record):
    """Fee parameter updated by the administrator."""

    kind: Literal["fee_changed"] = "fee_changed"
    new_fee: int = Field(ge=0, le=1000)


ExchangeEvent = Annotated[
    LiquidityAdded | LiquidityRemoved | Swapped | AssetSwapped | FeeChanged,
    Discriminator("kind"),
]


__all__ = [
    "SwapSide",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swapped",
    "AssetSwapped",
    "FeeChanged",
    "ExchangeEvent",
]
