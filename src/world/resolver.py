# src/world/resolver.py
"""
World-state resolvers: turn a store of bound values into a WorldState.

Condition name grammar understood by BlackboardWorldStateResolver:

    "<variable>:<Type>"   binding condition. TRUE iff a value bound to
                          <variable> (or, for "it"/"all", any bound value)
                          has <Type> as its own or an ancestor's simple or
                          qualified name. "<variable>:List" checks for a
                          list/tuple instead. A mapping bound with a label
                          matches that label.
    "hasRun_<action>"     TRUE iff <action> is in the executed history.
    "<name>"              a registered named Condition (exact match, or
                          qualified name ending in ".<name>"), otherwise
                          an explicitly set blackboard flag.

Nothing here raises for an unrecognised or malformed name: it resolves
to FALSE.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from planning.conditions import ConditionValue
from planning.system import PlanningSystem
from planning.world_state import WorldState

from .blackboard import ANY_BINDINGS, Blackboard
from .conditions import Condition, ConditionContext
from .type_registry import TypeRegistry

logger = logging.getLogger(__name__)

HAS_RUN_CONDITION_PREFIX = "hasRun_"
LIST_TYPE = "List"


def has_run_condition(action_name: str) -> str:
    """Condition name that becomes TRUE once `action_name` has executed."""
    return f"{HAS_RUN_CONDITION_PREFIX}{action_name}"


class MapWorldStateResolver:
    """
    Resolver over a fixed mapping.

    Every name in `known_conditions` starts out as `default` (FALSE, like
    a flag that was never set) unless the mapping gives it a value.
    Conditions outside both are UNKNOWN when asked for individually.
    """

    def __init__(
        self,
        mapping: Optional[Mapping[str, ConditionValue]] = None,
        known_conditions: Iterable[str] = (),
        default: ConditionValue = ConditionValue.FALSE,
    ) -> None:
        self._mapping = {name: default for name in known_conditions}
        self._mapping.update(mapping or {})

    def resolve_world_state(self) -> WorldState:
        return WorldState(self._mapping)

    def resolve_condition(self, condition: str) -> ConditionValue:
        return self._mapping.get(condition, ConditionValue.UNKNOWN)


class BlackboardWorldStateResolver:
    """
    Resolve every condition known to a PlanningSystem against a Blackboard.

    Named conditions costing more than `defer_cost_threshold` come back
    UNKNOWN from resolve_world_state() and are only evaluated when the
    planner asks for them through resolve_condition().

    `history` is read live, so the owning process can keep appending
    executed action names to the same list.
    """

    def __init__(
        self,
        blackboard: Blackboard,
        planning_system: PlanningSystem,
        conditions: Iterable[Condition] = (),
        history: Optional[Sequence[str]] = None,
        type_registry: Optional[TypeRegistry] = None,
        defer_cost_threshold: Optional[float] = None,
    ) -> None:
        self.blackboard = blackboard
        self.known_conditions: List[str] = sorted(planning_system.known_conditions())
        self.conditions: List[Condition] = list(conditions)
        self.history: Sequence[str] = history if history is not None else []
        self.type_registry = type_registry or TypeRegistry()
        self.defer_cost_threshold = defer_cost_threshold

    def resolve_world_state(self) -> WorldState:
        return WorldState(
            {name: self._determine(name, allow_deferral=True) for name in self.known_conditions}
        )

    def resolve_condition(self, condition: str) -> ConditionValue:
        return self._determine(condition, allow_deferral=False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _determine(self, condition: str, allow_deferral: bool) -> ConditionValue:
        if ":" in condition:
            determination = self._binding_condition(condition)
        elif condition.startswith(HAS_RUN_CONDITION_PREFIX):
            action_name = condition[len(HAS_RUN_CONDITION_PREFIX):]
            determination = ConditionValue.of(action_name in self.history)
            logger.debug("Determined hasRun condition %s=%s", condition, determination)
        else:
            named = self._named_condition(condition)
            if named is not None:
                if allow_deferral and self._should_defer(named):
                    logger.debug("Deferring condition %s (cost=%s)", condition, named.cost)
                    return ConditionValue.UNKNOWN
                determination = named.evaluate(
                    ConditionContext(blackboard=self.blackboard, history=tuple(self.history))
                )
                logger.debug("Determined named condition %s=%s", condition, determination)
            else:
                # explicitly set flags: never set means FALSE, not UNKNOWN
                determination = ConditionValue.of(self.blackboard.get_condition(condition)).as_definite()
                logger.debug("Determined explicitly set condition %s=%s", condition, determination)

        if determination is ConditionValue.UNKNOWN:
            logger.warning(
                "Determined condition %s to be unknown: known conditions=%s, %s",
                condition,
                self.known_conditions,
                self.blackboard.info_string(),
            )
        return determination

    def _binding_condition(self, condition: str) -> ConditionValue:
        variable, type_name = condition.split(":", 1)
        if not variable or not type_name:
            logger.debug("Malformed binding condition %r resolves to FALSE", condition)
            return ConditionValue.FALSE

        if type_name == LIST_TYPE:
            return ConditionValue.of(self._bound_sequence(variable) is not None)

        value = self.blackboard.get_value(variable, type_name, self.type_registry)
        determination = ConditionValue.of(value is not None)
        logger.debug(
            "Determined binding condition %s=%s: variable=%s, type=%s, value=%r",
            condition,
            determination,
            variable,
            type_name,
            value,
        )
        return determination

    def _bound_sequence(self, variable: str) -> Optional[Sequence]:
        bound = self.blackboard.get(variable)
        if isinstance(bound, (list, tuple)):
            return bound
        if variable in ANY_BINDINGS:
            for value in reversed(self.blackboard.objects):
                if isinstance(value, (list, tuple)):
                    return value
        return None

    def _named_condition(self, condition: str) -> Optional[Condition]:
        for named in self.conditions:
            if named.name == condition or named.name.endswith(f".{condition}"):
                return named
        return None

    def _should_defer(self, condition: Condition) -> bool:
        return self.defer_cost_threshold is not None and condition.cost > self.defer_cost_threshold
