# src/planning/errors.py
"""
Planning error taxonomy.

Not finding a plan is a normal outcome (planners return None); only
conditions the planner cannot handle, or bad configuration, raise.
"""

from __future__ import annotations

from typing import List, Sequence


class PlanningError(RuntimeError):
    """Base class for planner failures."""


class UnsupportedMultipleUnknownsError(PlanningError, NotImplementedError):
    """
    Raised when the start state holds more than one UNKNOWN condition.

    Only a single deferred condition can be explored; more than one is a
    known limitation of the planner.
    """

    def __init__(self, conditions: Sequence[str]) -> None:
        self.conditions: List[str] = list(conditions)
        super().__init__(
            f"Cannot plan with more than one unknown condition: {self.conditions}"
        )


class PlanningConfigError(ValueError):
    """Invalid value in planner configuration."""
