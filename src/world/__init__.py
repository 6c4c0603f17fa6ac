# src/world/__init__.py
"""
Resolver side of planning: the bound-value store, type lookup, named
conditions, and the resolvers that turn them into WorldStates.
"""

from .blackboard import ALL_BINDING, DEFAULT_BINDING, Blackboard
from .conditions import ComputedCondition, Condition, ConditionContext
from .resolver import (
    HAS_RUN_CONDITION_PREFIX,
    BlackboardWorldStateResolver,
    MapWorldStateResolver,
    has_run_condition,
)
from .type_registry import TypeRegistry, qualified_name

__all__ = [
    "ALL_BINDING",
    "Blackboard",
    "BlackboardWorldStateResolver",
    "ComputedCondition",
    "Condition",
    "ConditionContext",
    "DEFAULT_BINDING",
    "HAS_RUN_CONDITION_PREFIX",
    "MapWorldStateResolver",
    "TypeRegistry",
    "has_run_condition",
    "qualified_name",
]
