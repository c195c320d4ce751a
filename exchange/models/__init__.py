"""Pydantic models for exchange records and shared types."""

from exchange.models.events import (
    AssetSwapped,
    ExchangeEvent,
    FeeChanged,
    LiquidityAdded,
    LiquidityRemoved,
    Swapped,
    SwapSide,
)
from exchange.models.types import Handle, Uint256, normalize_handle

__all__ = [
    "AssetSwapped",
    "ExchangeEvent",
    "FeeChanged",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swapped",
    "SwapSide",
    "Handle",
    "Uint256",
    "normalize_handle",
]
