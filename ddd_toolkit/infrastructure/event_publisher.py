"""
Domain event publishing.

``DomainEventPublisher`` hands committed events, in recording order, to an
``EventDispatcher``. Dispatch is synchronous: a failing handler raises
straight through the publisher and the remaining events are not sent.
"""

from collections import defaultdict, deque
from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

import structlog

from ddd_toolkit.domain.common.domain_event import DomainEvent

logger = structlog.get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 1000

EventHandler = Callable[[DomainEvent], None]


@runtime_checkable
class EventDispatcher(Protocol):
    """Anything that can deliver a single event to its listeners."""

    def dispatch(self, event: DomainEvent) -> None: ...


class InMemoryEventDispatcher:
    """
    Deterministic, in-process dispatcher.

    Handlers subscribe to an event name or an event class. For each event,
    class subscribers run first, then name subscribers, then catch-all
    subscribers; each group runs in subscription order. The most recent
    ``history_limit`` dispatched events are kept in ``history``.
    """

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._by_name: dict[str, list[EventHandler]] = defaultdict(list)
        self._by_type: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._catch_all: list[EventHandler] = []
        self._history: deque[DomainEvent] = deque(maxlen=history_limit)

    def subscribe(self, event: str | type[DomainEvent], handler: EventHandler) -> None:
        """Register ``handler`` for an event name or for instances of an event class."""
        if isinstance(event, str):
            self._by_name[event].append(handler)
        else:
            self._by_type[event].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        self._catch_all.append(handler)

    def dispatch(self, event: DomainEvent) -> None:
        self._history.append(event)
        for handler in self._handlers_for(event):
            handler(event)

    def _handlers_for(self, event: DomainEvent) -> list[EventHandler]:
        handlers: list[EventHandler] = []
        for event_type, subscribed in self._by_type.items():
            if isinstance(event, event_type):
                handlers.extend(subscribed)
        handlers.extend(self._by_name.get(event.event_name, []))
        handlers.extend(self._catch_all)
        return handlers

    @property
    def history(self) -> list[DomainEvent]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()


class DomainEventPublisher:
    """Publishes domain events through an ``EventDispatcher``."""

    def __init__(self, dispatcher: EventDispatcher) -> None:
        self.dispatcher = dispatcher

    def publish_event(self, event: DomainEvent) -> None:
        self.dispatcher.dispatch(event)
        logger.debug(
            "domain_event_dispatched",
            event_name=event.event_name,
            event_id=str(event.event_id),
            aggregate_id=str(event.aggregate_id),
        )

    def publish_events(self, events: Iterable[DomainEvent]) -> None:
        """
        Dispatch events one by one, in the given order.

        Raises:
            Whatever the dispatcher raises; later events are not dispatched
        """
        published = 0
        for event in events:
            self.publish_event(event)
            published += 1

        if published:
            logger.info("domain_events_published", count=published)
