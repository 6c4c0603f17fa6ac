# path: src/monitoring/events.py
"""
Event schemas for planning and plan execution.

This module defines:
- EventType enum
- MonitoringEvent (structured events published on monitoring.bus.EventBus)

All events are JSON-serializable via `.to_dict()` and are written out by
monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed events emitted by planners and agent processes."""

    # Planner outcomes
    PLAN_FORMULATED = auto()
    PLAN_NOT_FOUND = auto()

    # Execution of a single planned action
    ACTION_EXECUTED = auto()
    ACTION_FAILED = auto()

    # Process lifecycle
    PROCESS_FINISHED = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by a planner or agent process.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("agent.process", ...)
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (plan, action, world state)
    correlation_id: Optional[str] = None  # Groups events per process

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
