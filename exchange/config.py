"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from exchange.constants import DEFAULT_ADMIN, DEFAULT_EXCHANGE_ADDRESS, DEFAULT_FEE, MAX_FEE
from exchange.errors import FeeOutOfRange, InvalidConfiguration


@dataclass(frozen=True)
class EngineConfig:
    """Construction-time settings for an Exchange.

    Attributes:
        address: Identity the engine holds reserves under on every ledger
        admin: Initializing identity, granted the fee-setter permission
        fee: Initial fee in parts-per-thousand (default: 3)
    """

    address: str = DEFAULT_EXCHANGE_ADDRESS
    admin: str = DEFAULT_ADMIN
    fee: int = DEFAULT_FEE

    def __post_init__(self) -> None:
        if not 0 <= self.fee <= MAX_FEE:
            raise FeeOutOfRange(f"Initial fee {self.fee} outside [0, {MAX_FEE}]")
        if self.address == self.admin:
            raise InvalidConfiguration("Engine address and admin identity must differ")

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from EXCHANGE_ADDRESS, EXCHANGE_ADMIN and EXCHANGE_FEE."""
        return cls(
            address=os.environ.get("EXCHANGE_ADDRESS", DEFAULT_EXCHANGE_ADDRESS),
            admin=os.environ.get("EXCHANGE_ADMIN", DEFAULT_ADMIN),
            fee=int(os.environ.get("EXCHANGE_FEE", str(DEFAULT_FEE))),
        )


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
