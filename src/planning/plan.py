# src/planning/plan.py
"""
Plan: an ordered, not-yet-executed commitment to reach a goal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .steps import Action, Goal
from .world_state import WorldState


@dataclass(frozen=True)
class Plan:
    """
    Ordered actions, the goal they satisfy and the state they start from.

    Fields:
      - actions:
          Actions to execute in order. Empty when the goal already holds.
      - goal:
          The goal this plan reaches.
      - world_state:
          The (possibly partially UNKNOWN) state the search started from.
    """

    actions: Tuple[Action, ...]
    goal: Goal
    world_state: WorldState

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", tuple(self.actions))

    @property
    def cost(self) -> float:
        return sum(a.cost for a in self.actions)

    @property
    def actions_value(self) -> float:
        return sum(a.value for a in self.actions)

    @property
    def net_value(self) -> float:
        """Goal value plus the value of the actions, less their cost."""
        return self.goal.value + self.actions_value - self.cost

    def is_complete(self) -> bool:
        """True when there is nothing left to do."""
        return not self.actions

    def action_names(self) -> List[str]:
        return [a.name for a in self.actions]

    def signature(self) -> Tuple[str, ...]:
        """Plan shape: the ordered action names."""
        return tuple(a.name for a in self.actions)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe summary."""
        return {
            "goal": self.goal.name,
            "actions": self.action_names(),
            "cost": self.cost,
            "net_value": self.net_value,
            "start_state": {k: v.name for k, v in sorted(self.world_state.items())},
        }

    def info_string(self, verbose: bool = False, indent: int = 0) -> str:
        pad = " " * indent
        head = (
            f"{pad}Plan to {self.goal.name}: {' -> '.join(self.action_names()) or '<complete>'} "
            f"cost={self.cost:.2f} netValue={self.net_value:.2f}"
        )
        if not verbose:
            return head
        lines = [head]
        lines += [a.info_string(indent + 2) for a in self.actions]
        lines.append(f"{pad}  start={self.world_state!r}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.info_string()
