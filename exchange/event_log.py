"""In-process record of emitted exchange events."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from exchange.models.events import ExchangeEvent

logger = structlog.get_logger()

Subscriber = Callable[[ExchangeEvent], None]


class EventLog:
    """Append-only list of published events with optional subscribers.

    Subscribers run synchronously after the record is appended. A subscriber
    that raises propagates to the publisher; the record stays in the log.
    """

    def __init__(self) -> None:
        self._records: list[ExchangeEvent] = []
        self._subscribers: list[Subscriber] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[ExchangeEvent]:
        """Copy of all published records, oldest first."""
        return list(self._records)

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def publish(self, event: ExchangeEvent) -> None:
        self._records.append(event)
        logger.info(event.kind, **event.model_dump(exclude={"kind"}))
        for callback in self._subscribers:
            callback(event)

    def since(self, index: int) -> list[ExchangeEvent]:
        """Records published at or after position index."""
        return self._records[index:]
