"""Exchange error classes.

Every failure raised by the engine derives from ExchangeError and carries a
stable ``reason`` string so callers can match on it without parsing messages.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Where in an operation the failure was detected."""

    PRECONDITION = "precondition"
    ECONOMIC = "economic"
    COLLABORATOR = "collaborator"
    ARITHMETIC = "arithmetic"


class ExchangeError(Exception):
    """Base error for exchange operations."""

    reason: ClassVar[str] = "ExchangeError"
    kind: ClassVar[ErrorKind] = ErrorKind.PRECONDITION


# --- Precondition violations ---


class InvalidAmount(ExchangeError):
    """Amount is zero, negative, or not an integer."""

    reason = "InvalidAmount"


class InvalidHandle(ExchangeError):
    """Asset handle is empty or whitespace."""

    reason = "InvalidHandle"


class InvalidConfiguration(ExchangeError):
    """Engine settings are inconsistent."""

    reason = "InvalidConfiguration"


class IdenticalAssets(ExchangeError):
    """Asset-to-asset swap names the same asset on both sides."""

    reason = "IdenticalAssets"


class UnknownAsset(ExchangeError):
    """No ledger is registered for the asset handle."""

    reason = "UnknownAsset"


class PoolNotFound(ExchangeError):
    """Pool is uninitialized (zero share supply)."""

    reason = "PoolNotFound"


class InsufficientShares(ExchangeError):
    """Caller holds fewer shares than requested."""

    reason = "InsufficientShares"


class Unauthorized(ExchangeError):
    """Caller lacks the administrative permission."""

    reason = "Unauthorized"


class FeeOutOfRange(ExchangeError):
    """Fee must be in [0, 1000] parts-per-thousand."""

    reason = "FeeOutOfRange"


class Reentrancy(ExchangeError):
    """A public operation was entered while another is executing."""

    reason = "Reentrancy"


# --- Economic violations ---


class InsufficientInitialLiquidity(ExchangeError):
    """Bootstrap deposit would mint zero shares."""

    reason = "InsufficientInitialLiquidity"
    kind = ErrorKind.ECONOMIC


class InsufficientBaseSent(ExchangeError):
    """Base sent is below the amount the current ratio requires."""

    reason = "InsufficientBaseSent"
    kind = ErrorKind.ECONOMIC


class InsufficientSharesMinted(ExchangeError):
    """Proportional deposit would mint zero shares."""

    reason = "InsufficientSharesMinted"
    kind = ErrorKind.ECONOMIC


class InsufficientReserves(ExchangeError):
    """Burning the shares would redeem zero of one side."""

    reason = "InsufficientReserves"
    kind = ErrorKind.ECONOMIC


class InsufficientOutputAmount(ExchangeError):
    """Swap output is below the caller's minimum."""

    reason = "InsufficientOutputAmount"
    kind = ErrorKind.ECONOMIC


# --- Collaborator failures ---


class AssetTransferFailed(ExchangeError):
    """Asset ledger reported a failed transfer."""

    reason = "AssetTransferFailed"
    kind = ErrorKind.COLLABORATOR


class BaseTransferFailed(ExchangeError):
    """Base-currency send reported failure."""

    reason = "BaseTransferFailed"
    kind = ErrorKind.COLLABORATOR


class InvariantViolation(ExchangeError):
    """Registry state breaks a pool or share-sum invariant."""

    reason = "InvariantViolation"
    kind = ErrorKind.ARITHMETIC
