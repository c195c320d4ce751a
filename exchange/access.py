"""Administrative permission and reentrancy exclusion."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from exchange.errors import Reentrancy, Unauthorized

logger = structlog.get_logger()


class Permissions:
    """Identity -> bool mapping for the single administrative permission.

    The permission is granted once, at construction, to the initializing
    identity. There are no further tiers and no grant operation.
    """

    def __init__(self, admin: str) -> None:
        self._granted: dict[str, bool] = {admin: True}

    def has_permission(self, identity: str) -> bool:
        return self._granted.get(identity, False)

    def require(self, identity: str) -> None:
        """Raise Unauthorized unless identity holds the permission."""
        if not self.has_permission(identity):
            logger.warning("unauthorized_call", caller=identity)
            raise Unauthorized(f"{identity} does not hold the administrative permission")


class ReentrancyGuard:
    """Per-instance "operation in progress" flag.

    Usage:
        with guard.enter("deposit"):
            ...

    A second enter() while the flag is held raises Reentrancy without
    touching the flag, so the outer operation keeps its exclusive section.
    """

    def __init__(self) -> None:
        self._active: str | None = None

    @property
    def locked(self) -> bool:
        return self._active is not None

    @contextmanager
    def enter(self, operation: str) -> Iterator[None]:
        if self._active is not None:
            logger.warning("reentrant_call_rejected", operation=operation, active=self._active)
            raise Reentrancy(f"{operation} called while {self._active} is executing")
        self._active = operation
        try:
            yield
        finally:
            self._active = None
