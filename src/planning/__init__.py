# src/planning/__init__.py
"""
Goal-oriented action planning (GOAP) core.

Re-exports the value types and planners used by the rest of the codebase:
  - ConditionValue, WorldState, Action, Goal, PlanningSystem, Plan
  - OptimizingPlanner (unknown-condition handling), AStarPlanner (search)
  - error types
"""

from .astar import AStarPlanner
from .conditions import ConditionValue
from .errors import PlanningConfigError, PlanningError, UnsupportedMultipleUnknownsError
from .optimizing import OptimizingPlanner
from .plan import Plan
from .steps import Action, EffectSpec, Goal, PlanStep
from .system import PlanningSystem
from .world_state import WorldState

__all__ = [
    "AStarPlanner",
    "Action",
    "ConditionValue",
    "EffectSpec",
    "Goal",
    "OptimizingPlanner",
    "Plan",
    "PlanStep",
    "PlanningConfigError",
    "PlanningError",
    "PlanningSystem",
    "UnsupportedMultipleUnknownsError",
    "WorldState",
]
