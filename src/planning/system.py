# src/planning/system.py
"""
PlanningSystem: the actions and candidate goals visible to one planning call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, Set

from .steps import Action, Goal


def _check_unique(kind: str, names: Iterable[str]) -> None:
    seen: Set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"Duplicate {kind} name '{name}' in planning system")
        seen.add(name)


@dataclass(frozen=True)
class PlanningSystem:
    """
    Immutable bundle of actions and goals.

    Action names and goal names must each be unique; the planner compares
    plans by their sequence of action names.
    """

    actions: FrozenSet[Action]
    goals: FrozenSet[Goal]

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", frozenset(self.actions))
        object.__setattr__(self, "goals", frozenset(self.goals))
        _check_unique("action", (a.name for a in self.actions))
        _check_unique("goal", (g.name for g in self.goals))

    @classmethod
    def for_goal(cls, actions: Iterable[Action], goal: Goal) -> "PlanningSystem":
        return cls(actions=frozenset(actions), goals=frozenset([goal]))

    def known_preconditions(self) -> Set[str]:
        return {key for action in self.actions for key in action.preconditions}

    def known_effects(self) -> Set[str]:
        return {key for action in self.actions for key in action.effects}

    def known_conditions(self) -> Set[str]:
        """Every condition a resolver must produce a value for."""
        goal_conditions = {key for goal in self.goals for key in goal.preconditions}
        return self.known_preconditions() | self.known_effects() | goal_conditions

    def action_named(self, name: str) -> Action:
        for action in self.actions:
            if action.name == name:
                return action
        raise KeyError(f"No action named '{name}'")

    def goal_named(self, name: str) -> Goal:
        for goal in self.goals:
            if goal.name == name:
                return goal
        raise KeyError(f"No goal named '{name}'")

    def with_actions(self, actions: Iterable[Action]) -> "PlanningSystem":
        return replace(self, actions=frozenset(actions))

    def info_string(self, indent: int = 0) -> str:
        pad = " " * indent
        lines = [f"{pad}GOAP system:", f"{pad} actions:"]
        lines += [f"{pad}  {a.name}" for a in sorted(self.actions, key=lambda a: a.name)]
        lines.append(f"{pad} goals:")
        lines += [f"{pad}  {g.name}" for g in sorted(self.goals, key=lambda g: g.name)]
        lines.append(f"{pad} knownPreconditions:")
        lines += [f"{pad}  {c}" for c in sorted(self.known_preconditions())]
        lines.append(f"{pad} knownEffects:")
        lines += [f"{pad}  {c}" for c in sorted(self.known_effects())]
        return "\n".join(lines)
