# src/planning/steps.py
"""
Plan steps: the common contract for GOAP actions and goals.

Both carry a name and a precondition set (EffectSpec). An Action also
declares the effects it is *expected* to have; the caller must re-resolve
the world after real execution because effects are not guaranteed. A Goal
declares the value of reaching it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from .conditions import ConditionValue
from .world_state import WorldState

# Condition name -> required (precondition) or asserted (effect) value
EffectSpec = Mapping[str, ConditionValue]


def effect_spec(
    names: Iterable[str] = (),
    value: ConditionValue = ConditionValue.TRUE,
) -> Dict[str, ConditionValue]:
    """Build an EffectSpec mapping every name to the same value."""
    return {name: value for name in names}


def preconditions_satisfied(preconditions: EffectSpec, state: Mapping[str, ConditionValue]) -> bool:
    """
    Exact match: every precondition must equal the state's entry.

    A missing entry never satisfies a precondition, and UNKNOWN only
    satisfies an UNKNOWN precondition.
    """
    return all(state.get(key) is value for key, value in preconditions.items())


def _freeze(spec: Optional[EffectSpec]) -> FrozenSet:
    return frozenset((spec or {}).items())


def _describe(spec: EffectSpec) -> str:
    return "{" + ", ".join(f"{k}={v}" for k, v in sorted(spec.items())) + "}"


class PlanStep:
    """Shared behaviour for anything with a name and preconditions."""

    name: str
    preconditions: EffectSpec

    @property
    def known_conditions(self) -> FrozenSet[str]:
        return frozenset(self.preconditions)

    def is_achievable(self, state: WorldState) -> bool:
        """Whether this step is available in `state`."""
        return preconditions_satisfied(self.preconditions, state)


@dataclass(frozen=True)
class Action(PlanStep):
    """
    GOAP action with preconditions, expected effects, cost and value.

    cost and value are conventionally in [0, 1]; only a negative cost is
    rejected since it would break the A* ordering.
    """

    name: str
    preconditions: EffectSpec = field(default_factory=dict)
    effects: EffectSpec = field(default_factory=dict)
    cost: float = 0.0
    value: float = 0.0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Action name must be non-empty")
        if self.cost < 0:
            raise ValueError(f"Action '{self.name}' has negative cost {self.cost}")
        object.__setattr__(self, "preconditions", dict(self.preconditions))
        object.__setattr__(self, "effects", dict(self.effects))

    def __hash__(self) -> int:
        return hash(
            (self.name, _freeze(self.preconditions), _freeze(self.effects), self.cost, self.value)
        )

    @classmethod
    def of(
        cls,
        name: str,
        pre: Iterable[str] = (),
        post: Iterable[str] = (),
        cost: float = 0.0,
        value: float = 0.0,
    ) -> "Action":
        """Shorthand where every listed condition is required / asserted TRUE."""
        return cls(
            name=name,
            preconditions=effect_spec(pre),
            effects=effect_spec(post),
            cost=cost,
            value=value,
        )

    @property
    def known_conditions(self) -> FrozenSet[str]:
        return frozenset(self.preconditions) | frozenset(self.effects)

    def apply(self, state: WorldState) -> WorldState:
        """Expected state after this action; unchanged conditions carry over."""
        return state.merged(self.effects)

    def info_string(self, indent: int = 0) -> str:
        return " " * indent + (
            f"{self.name} - pre={_describe(self.preconditions)} "
            f"effects={_describe(self.effects)} cost={self.cost} value={self.value}"
        )


@dataclass(frozen=True)
class Goal(PlanStep):
    """
    GOAP goal. A goal without explicit preconditions requires a TRUE
    condition carrying its own name.
    """

    name: str
    preconditions: Optional[EffectSpec] = None
    value: float = 0.0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Goal name must be non-empty")
        pre = self.preconditions
        if pre is None:
            pre = {self.name: ConditionValue.TRUE}
        object.__setattr__(self, "preconditions", dict(pre))

    def __hash__(self) -> int:
        return hash((self.name, _freeze(self.preconditions), self.value, self.description))

    @classmethod
    def of(cls, name: str, pre: Iterable[str], value: float = 0.0) -> "Goal":
        return cls(name=name, preconditions=effect_spec(pre), value=value)

    def info_string(self, indent: int = 0) -> str:
        return " " * indent + f"{self.name} - pre={_describe(self.preconditions)} value={self.value}"
