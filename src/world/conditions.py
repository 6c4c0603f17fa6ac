# src/world/conditions.py
"""
Named, reusable conditions with their own evaluation function.

Actions refer to these by name in their preconditions/effects; the
resolver evaluates them against a ConditionContext. Each condition has
a cost in [0, 1] (0 cheap, 1 expensive) so resolvers can defer expensive
ones and leave them UNKNOWN until the planner needs the answer.

Conditions compose with three-valued logic:

    ~a            negation (UNKNOWN stays UNKNOWN)
    a & b         conjunction, short-circuits on FALSE
    a | b         disjunction, short-circuits on TRUE
    a.is_unknown()  TRUE exactly when `a` is UNKNOWN
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence, Union

from planning.conditions import ConditionValue

from .blackboard import Blackboard


@dataclass(frozen=True)
class ConditionContext:
    """What a named condition may look at: the store and executed actions."""
    blackboard: Blackboard
    history: Sequence[str] = field(default_factory=tuple)


Evaluator = Callable[[ConditionContext], Union[bool, None, ConditionValue]]


class Condition:
    """Base class for named conditions."""

    name: str = ""
    cost: float = 0.0

    def evaluate(self, context: ConditionContext) -> ConditionValue:
        raise NotImplementedError("Condition subclasses must override evaluate()")

    def __invert__(self) -> "Condition":
        return _NotCondition(self)

    def __and__(self, other: "Condition") -> "Condition":
        return _AndCondition(self, other)

    def __or__(self, other: "Condition") -> "Condition":
        return _OrCondition(self, other)

    def is_unknown(self) -> "Condition":
        return _UnknownCondition(self)

    def info_string(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', cost={self.cost})"

    def __repr__(self) -> str:
        return self.info_string()


class ComputedCondition(Condition):
    """Condition backed by a callable returning bool, None or ConditionValue."""

    def __init__(self, name: str, evaluator: Evaluator, cost: float = 0.0) -> None:
        if not 0.0 <= cost <= 1.0:
            raise ValueError(f"Condition '{name}' cost must be in [0, 1], got {cost}")
        self.name = name
        self.cost = cost
        self._evaluator = evaluator

    def evaluate(self, context: ConditionContext) -> ConditionValue:
        result = self._evaluator(context)
        if isinstance(result, ConditionValue):
            return result
        return ConditionValue.of(result)


class _NotCondition(Condition):
    def __init__(self, condition: Condition) -> None:
        self._condition = condition
        self.name = f"!{condition.name}"
        self.cost = condition.cost

    def evaluate(self, context: ConditionContext) -> ConditionValue:
        result = self._condition.evaluate(context)
        if result is ConditionValue.TRUE:
            return ConditionValue.FALSE
        if result is ConditionValue.FALSE:
            return ConditionValue.TRUE
        return ConditionValue.UNKNOWN


class _UnknownCondition(Condition):
    def __init__(self, condition: Condition) -> None:
        self._condition = condition
        self.name = f"?{condition.name}"
        self.cost = condition.cost

    def evaluate(self, context: ConditionContext) -> ConditionValue:
        return ConditionValue.of(self._condition.evaluate(context) is ConditionValue.UNKNOWN)


class _AndCondition(Condition):
    def __init__(self, a: Condition, b: Condition) -> None:
        self._a = a
        self._b = b
        self.name = f"({a.name} AND {b.name})"
        # cheaper side can short-circuit
        self.cost = min(a.cost, b.cost)

    def evaluate(self, context: ConditionContext) -> ConditionValue:
        a = self._a.evaluate(context)
        if a is ConditionValue.FALSE:
            return ConditionValue.FALSE
        b = self._b.evaluate(context)
        if b is ConditionValue.FALSE:
            return ConditionValue.FALSE
        if ConditionValue.UNKNOWN in (a, b):
            return ConditionValue.UNKNOWN
        return ConditionValue.TRUE


class _OrCondition(Condition):
    def __init__(self, a: Condition, b: Condition) -> None:
        self._a = a
        self._b = b
        self.name = f"({a.name} OR {b.name})"
        self.cost = min(a.cost, b.cost)

    def evaluate(self, context: ConditionContext) -> ConditionValue:
        a = self._a.evaluate(context)
        if a is ConditionValue.TRUE:
            return ConditionValue.TRUE
        b = self._b.evaluate(context)
        if b is ConditionValue.TRUE:
            return ConditionValue.TRUE
        if ConditionValue.UNKNOWN in (a, b):
            return ConditionValue.UNKNOWN
        return ConditionValue.FALSE
