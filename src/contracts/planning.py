# src/contracts/planning.py
from __future__ import annotations

from typing import Any, Collection, List, Optional, Protocol

from planning.conditions import ConditionValue
from planning.plan import Plan
from planning.steps import Action, Goal
from planning.system import PlanningSystem
from planning.world_state import WorldState


class WorldStateResolver(Protocol):
    """Turns an external store of bound values into a WorldState."""

    def resolve_world_state(self) -> WorldState:
        """
        Produce a value for every condition the current planning system
        knows about. Expensive conditions may come back UNKNOWN; the
        planner will ask for them individually if they matter.
        """
        ...

    def resolve_condition(self, condition: str) -> ConditionValue:
        """
        Evaluate one condition, bypassing any caching or deferral.

        Must be read-only with respect to the store.
        """
        ...


class Planner(Protocol):
    """Chooses and orders actions to reach goals."""

    def world_state(self) -> WorldState:
        ...

    def plan_to_goal(self, actions: Collection[Action], goal: Goal) -> Optional[Plan]:
        """Best plan to `goal`, or None if there is none."""
        ...

    def plans_to_goals(self, system: PlanningSystem) -> List[Plan]:
        """Plans for every reachable goal, best net value first."""
        ...

    def best_value_plan_to_any_goal(self, system: PlanningSystem) -> Optional[Plan]:
        ...

    def prune(self, system: PlanningSystem) -> PlanningSystem:
        """Drop actions that appear in no plan to any goal."""
        ...


class ActionExecutor(Protocol):
    """Performs an action's real work against the bound-value store."""

    def execute(self, action: Action, blackboard: Any) -> None:
        """
        Run `action`. Raise on failure; success is judged afterwards by
        re-resolving the world state, not by the return value.
        """
        ...
