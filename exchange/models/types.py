"""Shared type definitions for exchange models.

These types are used by the event records and the HTTP schemas.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from exchange.errors import InvalidHandle
from exchange.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> str:
    """Coerce an amount to its canonical decimal string.

    Ints are accepted for convenience on the Python side; JSON clients send
    decimal strings so that amounts above 2**53 survive.

    Raises:
        ValueError: If value is not an int or decimal string in [0, 2**256 - 1]
    """
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ValueError(f"Amount must be a non-negative decimal integer: '{value}'")
        amount = int(text)
    elif isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError(f"Amount cannot be negative: {value}")
        amount = value
    else:
        raise ValueError(f"Amount must be a decimal string or int, got {type(value).__name__}")

    if amount > UINT256_MAX:
        raise ValueError(f"Amount exceeds uint256: {value}")
    return str(amount)


# Token amount, share count or reserve on the wire
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="Unsigned 256-bit amount as a decimal string"),
]

# Opaque identity or asset handle
Handle = Annotated[str, Field(min_length=1, max_length=128)]


def normalize_handle(handle: str) -> str:
    """Normalize an asset handle for use as a registry key.

    Handles are compared case-insensitively so that checksummed and
    lowercase hex addresses resolve to the same pool.

    Args:
        handle: Asset handle, typically a 0x-prefixed address

    Returns:
        Stripped, lowercased handle

    Raises:
        InvalidHandle: If the handle is empty or only whitespace
    """
    key = handle.strip().lower()
    if not key:
        raise InvalidHandle("Asset handle cannot be empty")
    return key


__all__ = ["Uint256", "Handle", "validate_uint256", "normalize_handle"]
