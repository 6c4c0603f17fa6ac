# src/planning/astar.py
"""
A* search over GOAP world states.

- Nodes are WorldStates; an edge applies one achievable action's effects.
- Edge cost is action.cost; heuristic counts unmet goal preconditions.
- Ties on f are broken by action name, then insertion order, so identical
  inputs always produce identical plans.
- After the first goal hit the search keeps going, pruning anything that
  cannot beat the best goal cost found so far.
- max_iterations guard bounds the work done per call.

The raw path is then simplified: actions that establish nothing the goal
(or a later kept action) needs are dropped, as long as the shorter plan
still validates.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .config import PlannerConfig
from .optimizing import OptimizingPlanner
from .plan import Plan
from .steps import Action, Goal
from .world_state import WorldState

logger = logging.getLogger(__name__)

# (f_score, action name of the incoming edge, insertion seq, g_score, state)
_HeapEntry = Tuple[float, str, int, float, WorldState]


def _heuristic(state: WorldState, goal: Goal) -> float:
    """Number of goal preconditions not met in `state`."""
    return float(sum(1 for key, value in goal.preconditions.items() if state.get(key) is not value))


def _reconstruct_path(
    came_from: Dict[WorldState, Tuple[WorldState, Action]],
    current: WorldState,
) -> List[Action]:
    """Walk parent links back to the root, then reverse."""
    actions: List[Action] = []
    while current in came_from:
        previous, action = came_from[current]
        actions.append(action)
        current = previous
    actions.reverse()
    return actions


def simulate(start_state: WorldState, actions: Sequence[Action]) -> Optional[WorldState]:
    """
    Apply `actions` in order, requiring each to be achievable.

    Returns the final state, or None as soon as an action is not available.
    """
    state = start_state
    for action in actions:
        if not action.is_achievable(state):
            return None
        state = action.apply(state)
    return state


def achieves_goal(start_state: WorldState, actions: Sequence[Action], goal: Goal) -> bool:
    final = simulate(start_state, actions)
    return final is not None and goal.is_achievable(final)


class AStarPlanner(OptimizingPlanner):
    """
    GOAP planner finding the lowest-cost action sequence with A*.

    Usage:

        planner = AStarPlanner(MapWorldStateResolver({"x": ConditionValue.FALSE}))
        plan = planner.plan_to_goal(actions, goal)
    """

    def __init__(self, resolver, config: Optional[PlannerConfig] = None) -> None:
        super().__init__(resolver)
        self.config = config or PlannerConfig()

    def plan_to_goal_from(
        self,
        start_state: WorldState,
        actions: Sequence[Action],
        goal: Goal,
    ) -> Optional[Plan]:
        ordered = sorted(actions, key=lambda a: a.name)
        counter = itertools.count()

        open_heap: List[_HeapEntry] = []
        heapq.heappush(open_heap, (_heuristic(start_state, goal), "", next(counter), 0.0, start_state))

        g_score: Dict[WorldState, float] = {start_state: 0.0}
        came_from: Dict[WorldState, Tuple[WorldState, Action]] = {}
        closed: Set[WorldState] = set()

        best_goal_state: Optional[WorldState] = None
        best_goal_score = float("inf")

        iterations = 0
        while open_heap and iterations < self.config.max_iterations:
            iterations += 1
            _, _, _, current_g, current = heapq.heappop(open_heap)

            # stale entry superseded by a cheaper path
            if current_g > g_score.get(current, float("inf")):
                continue
            if best_goal_state is not None and current_g >= best_goal_score:
                continue
            if current in closed:
                continue
            closed.add(current)

            if goal.is_achievable(current):
                best_goal_state = current
                best_goal_score = current_g
                continue

            for action in ordered:
                if not action.is_achievable(current):
                    continue
                next_state = action.apply(current)
                if next_state == current:
                    continue

                tentative_g = current_g + action.cost
                if best_goal_state is not None and tentative_g >= best_goal_score:
                    continue

                if tentative_g < g_score.get(next_state, float("inf")):
                    came_from[next_state] = (current, action)
                    g_score[next_state] = tentative_g
                    # a cheaper path reopens a closed state
                    closed.discard(next_state)
                    f_score = tentative_g + _heuristic(next_state, goal)
                    heapq.heappush(
                        open_heap,
                        (f_score, action.name, next(counter), tentative_g, next_state),
                    )

        if open_heap and iterations >= self.config.max_iterations:
            logger.warning(
                "A* planning to %s stopped after %d iterations with %d open states",
                goal.name,
                iterations,
                len(open_heap),
            )

        if best_goal_state is None:
            logger.debug("No plan to %s from %r after %d iterations", goal.name, start_state, iterations)
            return None

        path = _reconstruct_path(came_from, best_goal_state)
        if self.config.simplify_plans:
            path = self._simplify(path, start_state, goal)

        plan = Plan(actions=tuple(path), goal=goal, world_state=start_state)
        logger.debug("Found %s after %d iterations", plan.info_string(), iterations)
        return plan

    # ------------------------------------------------------------------
    # Plan simplification
    # ------------------------------------------------------------------

    def _simplify(self, path: List[Action], start_state: WorldState, goal: Goal) -> List[Action]:
        if not path:
            return path
        for simplify_pass in (_backward_pass, _forward_pass):
            candidate = simplify_pass(path, start_state, goal)
            if len(candidate) < len(path) and achieves_goal(start_state, candidate, goal):
                logger.debug(
                    "%s dropped %d action(s) from plan to %s",
                    simplify_pass.__name__,
                    len(path) - len(candidate),
                    goal.name,
                )
                path = candidate
        return path


def _backward_pass(path: List[Action], start_state: WorldState, goal: Goal) -> List[Action]:
    """
    Walk the plan from the end, keeping only actions whose effects
    establish a condition still needed by the goal or a kept action.
    """
    targets = dict(goal.preconditions)
    kept: List[Action] = []
    for action in reversed(path):
        needed = [key for key, value in action.effects.items() if targets.get(key) is value]
        if not needed:
            continue
        for key in needed:
            del targets[key]
        targets.update(action.preconditions)
        kept.append(action)
    kept.reverse()
    return kept


def _forward_pass(path: List[Action], start_state: WorldState, goal: Goal) -> List[Action]:
    """
    Simulate the plan, keeping only actions that flip an unmet goal
    precondition to its required value.
    """
    kept: List[Action] = []
    state = start_state
    for action in path:
        if not action.is_achievable(state):
            continue
        next_state = action.apply(state)
        progress = next_state != state and any(
            key in goal.preconditions
            and state.get(key) is not goal.preconditions[key]
            and value is goal.preconditions[key]
            for key, value in action.effects.items()
        )
        if progress:
            kept.append(action)
            state = next_state
    return kept
