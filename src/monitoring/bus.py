# EventBus for planning / execution events
"""
Minimal, thread-safe, in-process pub/sub for MonitoringEvents.

Used by:
    - agent.process.AgentProcess (plan and action events)
    - monitoring.logger.JsonFileLogger
    - tests and dev tools
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from .events import MonitoringEvent

logger = logging.getLogger(__name__)

SubscriberFn = Callable[[MonitoringEvent], None]


class EventBus:
    """
    Simple in-process event bus.

    - Thread-safe: subscribers list protected by a Lock.
    - Each publish iterates over a snapshot of subscribers, so subscribers
      may (un)subscribe from inside a callback.
    """

    def __init__(self) -> None:
        self._subscribers: List[SubscriberFn] = []
        self._lock = Lock()

    def subscribe(self, fn: SubscriberFn) -> None:
        with self._lock:
            self._subscribers.append(fn)

    def unsubscribe(self, fn: SubscriberFn) -> None:
        """Safe to call even if `fn` is not present."""
        with self._lock:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

    def publish(self, event: MonitoringEvent) -> None:
        """
        Deliver `event` to every subscriber.

        A failing subscriber is logged and does not prevent delivery to the
        others.
        """
        with self._lock:
            subscribers = list(self._subscribers)

        for fn in subscribers:
            try:
                fn(event)
            except Exception:
                logger.exception(
                    "Subscriber %r failed on %s event", fn, event.event_type.name
                )

    def clear(self) -> None:
        """Drop all subscribers. Mostly useful for tests."""
        with self._lock:
            self._subscribers.clear()
