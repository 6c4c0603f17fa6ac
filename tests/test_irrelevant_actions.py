# tests/test_irrelevant_actions.py
"""
Distraction scenarios: irrelevant chains, undo/redo loops and actions with
side effects must not end up in the plan.
"""

from __future__ import annotations

from planning.astar import AStarPlanner, achieves_goal
from planning.conditions import ConditionValue
from planning.steps import Action, Goal
from planning.system import PlanningSystem
from world.resolver import MapWorldStateResolver

T = ConditionValue.TRUE
F = ConditionValue.FALSE


def planner_for(state) -> AStarPlanner:
    return AStarPlanner(MapWorldStateResolver(state))


def chain(length: int):
    return [
        Action.of(f"realAction{i}", pre=["start" if i == 1 else f"step{i - 1}"], post=[f"step{i}"])
        for i in range(1, length + 1)
    ]


def test_irrelevant_chain_is_ignored():
    noise = [Action.of(f"irrelevantChain{i}", pre=[f"noise{i - 1}"], post=[f"noise{i}"]) for i in range(1, 11)]
    state = {"start": T}
    state.update({f"step{i}": F for i in range(1, 6)})
    state.update({f"noise{i}": T for i in range(0, 11)})

    plan = planner_for(state).plan_to_goal(chain(5) + noise, Goal.of("testGoal", pre=["step5"]))

    assert plan.action_names() == [f"realAction{i}" for i in range(1, 6)]


def test_multiple_irrelevant_chains_are_ignored():
    noise = [
        Action.of(f"irrelevantChain{c}_{i}", pre=[f"noise{c}_{i - 1}"], post=[f"noise{c}_{i}"])
        for c in range(1, 4)
        for i in range(1, 6)
    ]
    state = {"start": T}
    state.update({f"step{i}": F for i in range(1, 4)})
    state.update({f"noise{c}_{i}": T for c in range(1, 4) for i in range(0, 6)})

    plan = planner_for(state).plan_to_goal(chain(3) + noise, Goal.of("goal", pre=["step3"]))

    assert plan.action_names() == ["realAction1", "realAction2", "realAction3"]


def test_actions_that_undo_progress_are_excluded():
    actions = [
        Action.of("setA", pre=["start"], post=["A"]),
        Action("unsetA", preconditions={"A": T}, effects={"A": F}),
        Action.of("reachGoal", pre=["A"], post=["goal"]),
    ]

    plan = planner_for({"start": T, "A": F, "goal": F}).plan_to_goal(actions, Goal.of("goal", pre=["goal"]))

    assert "unsetA" not in plan.action_names()
    assert plan.action_names() == ["setA", "reachGoal"]


def test_no_bouncing_between_undo_and_redo():
    actions = [
        Action.of("setA", pre=["start"], post=["A"]),
        Action("unsetA", preconditions={"A": T}, effects={"A": F}),
        Action("setAagain", preconditions={"A": F}, effects={"A": T}),
        Action.of("reachGoal", pre=["A"], post=["goal"]),
    ]

    plan = planner_for({"start": T, "A": F, "goal": F}).plan_to_goal(actions, Goal.of("goal", pre=["goal"]))

    assert plan.action_names() in (["setA", "reachGoal"], ["setAagain", "reachGoal"])


def test_misleading_detour_still_gives_minimal_plan():
    actions = [
        Action.of("setA", pre=["start"], post=["A"]),
        Action.of("misleadA", pre=["start"], post=["A", "foo"]),
        Action.of("reachGoal", pre=["A"], post=["goal"]),
    ]

    plan = planner_for({"start": T, "A": F, "goal": F, "foo": F}).plan_to_goal(
        actions, Goal.of("goal", pre=["goal"])
    )

    assert plan.action_names() in (["setA", "reachGoal"], ["misleadA", "reachGoal"])


def test_misleading_effects_still_reach_goal():
    actions = [
        Action.of("actionA", pre=["start"], post=["stepB"]),
        Action.of("actionB", pre=["stepB"], post=["goal"]),
        Action.of("misleadingAction", pre=["start"], post=["goal", "wrongContext"]),
        Action.of("misleadingAction2", pre=["wrongContext"], post=["goal"]),
    ]
    planner = planner_for({"start": T, "stepB": F, "goal": F, "wrongContext": F})
    goal = Goal.of("testGoal", pre=["goal"])

    plan = planner.plan_to_goal(actions, goal)

    assert achieves_goal(planner.world_state(), plan.actions, goal)


def test_side_effect_enabled_action_is_not_used():
    actions = [
        Action.of("setA", pre=["start"], post=["A", "sideNoise"]),
        Action.of("reachGoal", pre=["A"], post=["goal"]),
        Action.of("irrelevantNoise", pre=["sideNoise"], post=["moreNoise"]),
    ]
    state = {"start": T, "A": F, "goal": F, "sideNoise": F, "moreNoise": F}

    plan = planner_for(state).plan_to_goal(actions, Goal.of("goal", pre=["goal"]))

    assert "irrelevantNoise" not in plan.action_names()


def test_distraction_with_no_net_effect_is_excluded():
    actions = [
        Action.of("setA", pre=["start"], post=["A"]),
        Action.of("distract", pre=["start"], post=["noise"]),
        Action("undoNoise", preconditions={"noise": T}, effects={"noise": F}),
        Action.of("reachGoal", pre=["A"], post=["goal"]),
    ]
    state = {"start": T, "A": F, "goal": F, "noise": F}

    plan = planner_for(state).plan_to_goal(actions, Goal.of("goal", pre=["goal"]))

    assert plan.action_names() == ["setA", "reachGoal"]


# ---------------------------------------------------------------------------
# Realistic mix: two unrelated workflows share an input condition
# ---------------------------------------------------------------------------

HOROSCOPE_GOAL = Goal.of("horoscopeNewsFinder", pre=["relevantNewsStories"])

MIXED_ACTIONS = [
    Action("toBeliever", preconditions={"userInput": T, "astrologyBeliever": F}, effects={"astrologyBeliever": T}),
    Action(
        "findNewsStories",
        preconditions={"astrologyBeliever": T, "relevantNewsStories": F},
        effects={"relevantNewsStories": T},
    ),
    Action.of("gpt-researcher", pre=["marketableProduct"], post=["enoughReports"]),
    Action.of("haiku-researcher", pre=["marketableProduct"], post=["enoughReports"]),
    Action.of("reportMerger", pre=["enoughReports"], post=["finalReport:MarketResearchReport"]),
    Action.of("ingest-MarketableProduct", pre=["userInput"], post=["marketableProduct"]),
]

START = {"userInput": T, "astrologyBeliever": F, "relevantNewsStories": F}


def test_plan_to_goal_ignores_unrelated_workflow():
    plan = planner_for(START).plan_to_goal(MIXED_ACTIONS, HOROSCOPE_GOAL)

    assert plan.action_names() == ["toBeliever", "findNewsStories"]


def test_plans_to_goals_ignores_unrelated_workflow():
    plans = planner_for(START).plans_to_goals(PlanningSystem.for_goal(MIXED_ACTIONS, HOROSCOPE_GOAL))

    assert len(plans) == 1
    assert plans[0].action_names() == ["toBeliever", "findNewsStories"]


def test_prune_keeps_only_relevant_actions():
    pruned = planner_for(START).prune(PlanningSystem.for_goal(MIXED_ACTIONS, HOROSCOPE_GOAL))

    assert {a.name for a in pruned.actions} == {"toBeliever", "findNewsStories"}
    assert pruned.goals == frozenset([HOROSCOPE_GOAL])
