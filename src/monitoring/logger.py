# JSON logger subscribing to EventBus
"""
Structured event logging.

Provides:
- JsonFileLogger: subscribes to an EventBus and writes MonitoringEvents as JSONL.
- log_event: convenience helper for publishing MonitoringEvents.

Usage:

    bus = EventBus()
    sink = JsonFileLogger(Path("logs/planning/events.log"), bus)

    log_event(
        bus=bus,
        module="agent.process",
        event_type=EventType.PLAN_FORMULATED,
        message="Plan formulated",
        payload={"goal": "done", "actions": ["a", "b"]},
    )
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent

logger = logging.getLogger(__name__)


class JsonFileLogger:
    """
    JSON-lines sink for MonitoringEvent instances.

    Creates the parent directory, appends UTF-8 lines, flushes per event.
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a", encoding="utf-8")
        self._bus = bus
        bus.subscribe(self._on_event)

    @property
    def path(self) -> Path:
        return self._path

    def _on_event(self, event: MonitoringEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False, default=str)
        self._file.write(line + "\n")
        self._file.flush()

    def close(self) -> None:
        """Unsubscribe and close the file. Safe to call twice."""
        self._bus.unsubscribe(self._on_event)
        if not self._file.closed:
            self._file.close()


def log_event(
    bus: EventBus,
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> MonitoringEvent:
    """
    Create and publish a MonitoringEvent; also mirrors it to stdlib logging
    at DEBUG level. Returns the published event.
    """
    event = MonitoringEvent(
        ts=time.time(),
        module=module,
        event_type=event_type,
        message=message,
        payload=payload or {},
        correlation_id=correlation_id,
    )
    logger.debug("%s %s: %s", module, event_type.name, message)
    bus.publish(event)
    return event
