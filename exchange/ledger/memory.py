"""In-memory ledgers backing the sandbox service and the test suite."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from exchange.constants import FEE_DENOMINATOR
from exchange.safe_int import S

logger = structlog.get_logger()

# Called as hook(sender, recipient, amount) after value has moved
TransferHook = Callable[[str, str, int], None]


@dataclass
class InMemoryAssetLedger:
    """Asset balances held in a dict.

    Attributes:
        address: Asset handle this ledger serves
        balances: holder -> balance
        transfer_tax: Parts-per-thousand withheld from every transfer and
            destroyed (0 for a well-behaved asset)
        on_transfer: Optional hook run after each successful transfer, used
            to model assets that call back into their counterparties
        fail_transfers: When True every transfer reports failure
    """

    address: str
    balances: dict[str, int] = field(default_factory=dict)
    transfer_tax: int = 0
    on_transfer: TransferHook | None = None
    fail_transfers: bool = False

    def balance_of(self, holder: str) -> int:
        return self.balances.get(holder, 0)

    @property
    def total_supply(self) -> int:
        return sum(self.balances.values())

    def mint(self, holder: str, amount: int) -> None:
        self.balances[holder] = (S(self.balance_of(holder)) + S(amount)).to_uint256()

    def transfer_from(self, owner: str, recipient: str, amount: int) -> bool:
        return self._move(owner, recipient, amount)

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        return self._move(sender, recipient, amount)

    def _move(self, sender: str, recipient: str, amount: int) -> bool:
        if self.fail_transfers or amount < 0 or self.balance_of(sender) < amount:
            return False
        tax = amount * self.transfer_tax // FEE_DENOMINATOR
        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[recipient] = self.balance_of(recipient) + amount - tax
        if self.on_transfer is not None:
            self.on_transfer(sender, recipient, amount)
        return True

    def checkpoint(self) -> dict[str, int]:
        return dict(self.balances)

    def rollback(self, token: dict[str, int]) -> None:
        self.balances = dict(token)


@dataclass
class InMemoryBaseLedger:
    """Base-currency balances held in a dict.

    Attributes:
        balances: holder -> balance
        rejecting: Recipients that refuse incoming value (send returns False)
        on_send: Optional hook run after each successful send
    """

    balances: dict[str, int] = field(default_factory=dict)
    rejecting: set[str] = field(default_factory=set)
    on_send: TransferHook | None = None

    def balance_of(self, holder: str) -> int:
        return self.balances.get(holder, 0)

    def fund(self, holder: str, amount: int) -> None:
        self.balances[holder] = (S(self.balance_of(holder)) + S(amount)).to_uint256()

    def send(self, sender: str, recipient: str, amount: int) -> bool:
        if amount < 0 or recipient in self.rejecting or self.balance_of(sender) < amount:
            logger.debug("base_send_refused", sender=sender, recipient=recipient, amount=amount)
            return False
        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[recipient] = self.balance_of(recipient) + amount
        if self.on_send is not None:
            self.on_send(sender, recipient, amount)
        return True

    def checkpoint(self) -> dict[str, int]:
        return dict(self.balances)

    def rollback(self, token: dict[str, int]) -> None:
        self.balances = dict(token)


__all__ = ["InMemoryAssetLedger", "InMemoryBaseLedger", "TransferHook"]
