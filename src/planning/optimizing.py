# src/planning/optimizing.py
"""
Planner base class that handles conditions the resolver left UNKNOWN.

Planning cycle:

    resolve start state
      -> UNKNOWN present?  explore TRUE/FALSE variants
           -> plan shapes differ?  force-evaluate the condition, replan
      -> search
      -> Plan | None

Subclasses provide the search itself via `plan_to_goal_from`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Collection, List, Optional, Sequence, Set, Tuple

from .errors import UnsupportedMultipleUnknownsError
from .plan import Plan
from .steps import Action, Goal
from .system import PlanningSystem
from .world_state import WorldState

if TYPE_CHECKING:
    from contracts.planning import WorldStateResolver

logger = logging.getLogger(__name__)


class OptimizingPlanner(ABC):
    """
    Resolves the start state, decides whether UNKNOWN conditions are worth
    evaluating, and delegates the search to `plan_to_goal_from`.
    """

    def __init__(self, resolver: "WorldStateResolver") -> None:
        self.resolver = resolver

    def world_state(self) -> WorldState:
        return self.resolver.resolve_world_state()

    def plan_to_goal(self, actions: Collection[Action], goal: Goal) -> Optional[Plan]:
        """
        Best plan from the resolved world state to `goal`, or None.

        With exactly one UNKNOWN condition, both definite variants are
        planned. Only if they disagree with each other or with the direct
        plan is the condition force-evaluated; "no plan" counts as a
        distinct outcome. Otherwise the direct plan is used and the
        resolver is never asked.
        """
        goap_actions = _check_actions(actions)
        start_state = self.world_state()
        direct_plan = self.plan_to_goal_from(start_state, goap_actions, goal)

        unknown = start_state.unknown_conditions()
        if not unknown:
            return direct_plan
        if len(unknown) > 1:
            raise UnsupportedMultipleUnknownsError(unknown)

        condition = unknown[0]
        candidates = [
            self.plan_to_goal_from(variant, goap_actions, goal)
            for variant in start_state.variants(condition)
        ]
        candidates.append(direct_plan)
        shapes: Set[Optional[Tuple[str, ...]]] = {
            p.signature() if p is not None else None for p in candidates
        }

        if len(shapes) > 1:
            logger.info(
                "Condition '%s' affects the plan to %s (%d distinct plans); evaluating it",
                condition,
                goal.name,
                len(shapes),
            )
            determined = self.resolver.resolve_condition(condition)
            resolved_state = start_state.with_condition(condition, determined)
            return self.plan_to_goal_from(resolved_state, goap_actions, goal)

        logger.debug("Condition '%s' does not affect the plan to %s", condition, goal.name)
        return direct_plan

    def plans_to_goals(self, system: PlanningSystem) -> List[Plan]:
        """Plans to every goal that has one, highest net value first."""
        plans: List[Plan] = []
        for goal in sorted(system.goals, key=lambda g: g.name):
            plan = self.plan_to_goal(system.actions, goal)
            if plan is not None:
                plans.append(plan)
        plans.sort(key=lambda p: (-p.net_value, p.goal.name))
        return plans

    def best_value_plan_to_any_goal(self, system: PlanningSystem) -> Optional[Plan]:
        plans = self.plans_to_goals(system)
        return plans[0] if plans else None

    def prune(self, system: PlanningSystem) -> PlanningSystem:
        """
        Reduce `system` to the actions used by at least one plan.

        Planning semantics are unchanged; this only shrinks the action set
        exposed downstream.
        """
        all_plans = self.plans_to_goals(system)
        logger.info(
            "%d plan(s) to consider in pruning%s",
            len(all_plans),
            "" if not all_plans else ":\n" + "\n".join(p.info_string(True, 1) for p in all_plans),
        )
        used = {action for plan in all_plans for action in plan.actions}
        return system.with_actions(a for a in system.actions if a in used)

    @abstractmethod
    def plan_to_goal_from(
        self,
        start_state: WorldState,
        actions: Sequence[Action],
        goal: Goal,
    ) -> Optional[Plan]:
        """Pure search from a given start state."""
        raise NotImplementedError


def _check_actions(actions: Collection[Action]) -> List[Action]:
    checked = list(actions)
    for action in checked:
        if not isinstance(action, Action):
            raise TypeError(f"Expected Action, got {type(action).__name__}: {action!r}")
    return checked
