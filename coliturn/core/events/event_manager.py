"""
Event bus connecting the simulator managers.

Managers never call each other to report what happened; they publish events
here and whoever cares subscribes. Events wait in a priority heap until
``process_events`` drains it on the caller's thread.
"""

import heapq
import itertools
import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import SimulatorEvent, EventType


class EventPriority(Enum):
    """Processing priority. Higher values are delivered first."""
    LOW = 1
    NORMAL = 2
    HIGH = 3
    CRITICAL = 4


_publication_counter = itertools.count()


@dataclass
class QueuedEvent:
    """An event waiting for delivery, with bookkeeping for the history."""
    event: "SimulatorEvent"
    priority: EventPriority = EventPriority.NORMAL
    timestamp: datetime = field(default_factory=datetime.now)
    source: Optional[str] = None
    sequence: int = field(default_factory=lambda: next(_publication_counter))

    def sort_key(self) -> tuple[int, int]:
        return (-self.priority.value, self.sequence)

    def __lt__(self, other: "QueuedEvent") -> bool:
        return self.sort_key() < other.sort_key()


EventSubscriber = Callable[["SimulatorEvent"], None]


@dataclass
class Subscription:
    callback: EventSubscriber
    name: str


def _describe(callback: EventSubscriber, name: Optional[str]) -> str:
    return name or getattr(callback, '__name__', 'anonymous')


class EventManager:
    """Priority-ordered publish/subscribe bus for simulator events.

    Subscribers registered for one event type are called before the ones
    registered for every type. A subscriber that raises is counted and
    reported through the debug callback; delivery to the rest continues.
    """

    def __init__(self, enable_debug_logging: bool = False, history_size: int = 1000):
        """
        Args:
            enable_debug_logging: Report bus activity through the debug callback
            history_size: How many delivered events to remember
        """
        self.enable_debug_logging = enable_debug_logging

        self._by_type: dict["EventType", list[Subscription]] = defaultdict(list)
        self._catch_all: list[Subscription] = []
        self._pending: list[QueuedEvent] = []
        self._delivered: deque[QueuedEvent] = deque(maxlen=history_size)

        self._counters = {'published': 0, 'processed': 0, 'subscriber_errors': 0}

        self._lock = threading.RLock()
        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        self._debug_callback = callback

    def _trace(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    # Subscriptions

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Call ``subscriber`` for every event of ``event_type``."""
        name = _describe(subscriber, subscriber_name)
        with self._lock:
            self._by_type[event_type].append(Subscription(subscriber, name))
        self._trace(f"{name} listening for {event_type.name}")

    def subscribe_all(self, subscriber: EventSubscriber, subscriber_name: Optional[str] = None) -> None:
        """Call ``subscriber`` for every event regardless of type."""
        name = _describe(subscriber, subscriber_name)
        with self._lock:
            self._catch_all.append(Subscription(subscriber, name))
        self._trace(f"{name} listening for all events")

    @staticmethod
    def _drop(subscriptions: list[Subscription], subscriber: EventSubscriber) -> bool:
        for index, subscription in enumerate(subscriptions):
            if subscription.callback == subscriber:
                del subscriptions[index]
                return True
        return False

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Stop delivering ``event_type`` to ``subscriber``.

        Returns:
            False if the subscriber was not registered for that type
        """
        with self._lock:
            removed = self._drop(self._by_type[event_type], subscriber)
        if removed:
            self._trace(f"Stopped {event_type.name} delivery to {_describe(subscriber, None)}")
        return removed

    def unsubscribe_all(self, subscriber: EventSubscriber) -> bool:
        """Remove a subscriber added with :meth:`subscribe_all`."""
        with self._lock:
            return self._drop(self._catch_all, subscriber)

    # Publishing

    def publish(
        self,
        event: "SimulatorEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event until the next :meth:`process_events` call."""
        queued = QueuedEvent(event=event, priority=priority, source=source or "unknown")
        with self._lock:
            heapq.heappush(self._pending, queued)
            self._counters['published'] += 1
        self._trace(f"Queued {type(event).__name__} from {queued.source} at {priority.name}")

    def publish_immediate(self, event: "SimulatorEvent", source: Optional[str] = None) -> None:
        """Deliver an event right away, bypassing the queue."""
        queued = QueuedEvent(event=event, priority=EventPriority.CRITICAL, source=source or "immediate")
        with self._lock:
            self._counters['published'] += 1
        self._deliver(queued)

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Deliver queued events in priority order.

        Events published by subscribers during delivery join the heap and are
        delivered in the same call.

        Args:
            max_events: Stop after this many deliveries (None drains the queue)

        Returns:
            Number of events delivered
        """
        delivered = 0
        while max_events is None or delivered < max_events:
            with self._lock:
                if not self._pending:
                    break
                queued = heapq.heappop(self._pending)
            self._deliver(queued)
            delivered += 1
        return delivered

    def _deliver(self, queued: QueuedEvent) -> None:
        event = queued.event
        with self._lock:
            self._delivered.append(queued)
            self._counters['processed'] += 1
            targets = [*self._by_type.get(event.event_type, ()), *self._catch_all]

        self._trace(f"Delivering {type(event).__name__} from {queued.source} to {len(targets)} subscribers")

        for subscription in targets:
            try:
                subscription.callback(event)
            except Exception as e:
                with self._lock:
                    self._counters['subscriber_errors'] += 1
                self._trace(f"{subscription.name} failed on {type(event).__name__}: {e}")

    # Housekeeping

    def clear_queue(self) -> int:
        """Drop every pending event and return how many there were."""
        with self._lock:
            dropped = len(self._pending)
            self._pending.clear()
        self._trace(f"Dropped {dropped} pending events")
        return dropped

    def has_queued_events(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def get_statistics(self) -> dict[str, Any]:
        with self._lock:
            return {
                'events_published': self._counters['published'],
                'events_processed': self._counters['processed'],
                'events_queued': len(self._pending),
                'subscriber_errors': self._counters['subscriber_errors'],
                'subscribers_count': sum(len(subs) for subs in self._by_type.values()),
                'universal_subscribers_count': len(self._catch_all),
                'event_history_size': len(self._delivered),
            }

    def get_recent_events(self, count: int = 10) -> list[dict[str, Any]]:
        """Describe the last ``count`` delivered events, oldest first."""
        with self._lock:
            recent = list(self._delivered)[-count:]
        return [
            {
                'event_type': type(queued.event).__name__,
                'priority': queued.priority.name,
                'source': queued.source,
                'timestamp': queued.timestamp.isoformat(),
            }
            for queued in recent
        ]

    def shutdown(self) -> None:
        """Forget all subscribers, pending events and history."""
        with self._lock:
            self._by_type.clear()
            self._catch_all.clear()
            self._pending.clear()
            self._delivered.clear()
