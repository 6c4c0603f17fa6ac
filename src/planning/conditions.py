# src/planning/conditions.py
"""
Three-valued condition logic used throughout the GOAP planner.

A condition is either known to hold, known not to hold, or has not been
evaluated yet. UNKNOWN is what a resolver hands back for conditions that
are expensive to evaluate; the planner decides later whether the answer
is worth paying for.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ConditionValue(Enum):
    """Truth value of a named condition: TRUE, FALSE or UNKNOWN."""

    TRUE = "true"
    FALSE = "false"
    UNKNOWN = "unknown"

    @classmethod
    def of(cls, value: Optional[bool]) -> "ConditionValue":
        """Map True/False/None onto TRUE/FALSE/UNKNOWN."""
        if value is None:
            return cls.UNKNOWN
        return cls.TRUE if value else cls.FALSE

    @classmethod
    def parse(cls, raw: Any) -> "ConditionValue":
        """
        Parse a config value into a ConditionValue.

        Accepts existing ConditionValue members, YAML booleans, None
        (UNKNOWN) and the strings "true" / "false" / "unknown" in any case.
        """
        if isinstance(raw, ConditionValue):
            return raw
        if raw is None or isinstance(raw, bool):
            return cls.of(raw)
        if isinstance(raw, str):
            text = raw.strip().lower()
            for member in cls:
                if member.value == text:
                    return member
        raise ValueError(f"Cannot interpret {raw!r} as a condition value")

    def as_definite(self) -> "ConditionValue":
        """Treat UNKNOWN as FALSE."""
        return ConditionValue.TRUE if self is ConditionValue.TRUE else ConditionValue.FALSE

    def __str__(self) -> str:
        return self.name
