# tests/test_planning_system.py

import dataclasses

import pytest

from planning.conditions import ConditionValue
from planning.steps import Action, Goal
from planning.system import PlanningSystem

T = ConditionValue.TRUE
F = ConditionValue.FALSE


def make_system() -> PlanningSystem:
    return PlanningSystem(
        actions=frozenset(
            [
                Action("a1", preconditions={"p1": T, "p2": F}, effects={"e1": T}),
                Action("a2", preconditions={"p2": T, "p3": T}, effects={"e2": T, "p1": F}),
            ]
        ),
        goals=frozenset([Goal("g", preconditions={"e2": T, "target": T})]),
    )


def test_known_preconditions():
    assert make_system().known_preconditions() == {"p1", "p2", "p3"}


def test_known_effects():
    assert make_system().known_effects() == {"e1", "e2", "p1"}


def test_known_conditions_include_goal_preconditions():
    assert make_system().known_conditions() == {"p1", "p2", "p3", "e1", "e2", "target"}


def test_no_actions_means_no_known_preconditions():
    system = PlanningSystem(actions=frozenset(), goals=frozenset([Goal("g")]))
    assert system.known_preconditions() == set()
    assert system.known_conditions() == {"g"}


def test_duplicate_names_rejected():
    with pytest.raises(ValueError, match="Duplicate action"):
        PlanningSystem(
            actions=[Action.of("a", cost=1.0), Action.of("a", cost=2.0)],
            goals=[Goal("g")],
        )
    with pytest.raises(ValueError, match="Duplicate goal"):
        PlanningSystem(actions=[], goals=[Goal("g", value=1.0), Goal("g", value=2.0)])


def test_lookups_by_name():
    system = make_system()
    assert system.action_named("a2").effects == {"e2": T, "p1": F}
    assert system.goal_named("g").name == "g"
    with pytest.raises(KeyError):
        system.action_named("missing")
    with pytest.raises(KeyError):
        system.goal_named("missing")


def test_for_goal_and_with_actions():
    goal = Goal("g")
    a = Action.of("a", post=["g"])
    b = Action.of("b", post=["x"])

    system = PlanningSystem.for_goal([a, b], goal)
    assert system.goals == frozenset([goal])

    smaller = system.with_actions([a])
    assert smaller.actions == frozenset([a])
    assert system.actions == frozenset([a, b])


def test_system_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        make_system().actions = frozenset()


def test_info_string_lists_known_sets():
    text = make_system().info_string()
    assert "knownPreconditions" in text
    assert "knownEffects" in text
    assert "  a1" in text
