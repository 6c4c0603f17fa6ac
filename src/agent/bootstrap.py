# src/agent/bootstrap.py
"""
Single entrypoint that wires an AgentProcess from config/planner.yaml.

    process = build_agent_process(system, executor, Blackboard())
    process.run()

Wiring:
  - logging level from `logging.level`
  - BlackboardWorldStateResolver with `resolver.defer_cost_threshold`,
    sharing the process history for hasRun_ conditions
  - AStarPlanner with the `planner` section
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from agent.logging_config import configure_logging
from agent.process import AgentProcess
from contracts.planning import ActionExecutor
from monitoring.bus import EventBus
from planning.astar import AStarPlanner
from planning.config import AppConfig, load_planner_config
from planning.system import PlanningSystem
from world.blackboard import Blackboard
from world.conditions import Condition
from world.resolver import BlackboardWorldStateResolver
from world.type_registry import TypeRegistry

logger = logging.getLogger(__name__)


def build_resolver(
    blackboard: Blackboard,
    system: PlanningSystem,
    config: AppConfig,
    conditions: Iterable[Condition] = (),
    history: Optional[List[str]] = None,
    type_registry: Optional[TypeRegistry] = None,
) -> BlackboardWorldStateResolver:
    """Blackboard resolver with deferral taken from the `resolver` section."""
    return BlackboardWorldStateResolver(
        blackboard,
        system,
        conditions=conditions,
        history=history,
        type_registry=type_registry,
        defer_cost_threshold=config.resolver.defer_cost_threshold,
    )


def build_agent_process(
    system: PlanningSystem,
    executor: ActionExecutor,
    blackboard: Blackboard,
    config: Optional[AppConfig] = None,
    conditions: Iterable[Condition] = (),
    type_registry: Optional[TypeRegistry] = None,
    bus: Optional[EventBus] = None,
    max_actions: int = 100,
    process_id: Optional[str] = None,
) -> AgentProcess:
    """
    Construct an AgentProcess whose planner and resolver follow `config`.

    Args:
        config:
            Resolved configuration. Loaded with load_planner_config()
            (explicit env var or config/planner.yaml) when omitted.
        conditions:
            Named conditions the resolver may evaluate, some of them
            possibly deferred.
    """
    if config is None:
        config = load_planner_config()

    configure_logging(config.logging.level_number)

    history: List[str] = []
    resolver = build_resolver(
        blackboard,
        system,
        config,
        conditions=conditions,
        history=history,
        type_registry=type_registry,
    )
    logger.debug(
        "Building agent process: defer_cost_threshold=%s, max_iterations=%d",
        config.resolver.defer_cost_threshold,
        config.planner.max_iterations,
    )
    return AgentProcess(
        planner=AStarPlanner(resolver, config=config.planner),
        system=system,
        executor=executor,
        blackboard=blackboard,
        bus=bus,
        history=history,
        max_actions=max_actions,
        process_id=process_id,
    )
