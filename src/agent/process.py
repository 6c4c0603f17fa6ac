# src/agent/process.py
"""
AgentProcess: plan -> execute one action -> replan.

The planner is re-run before every action because action effects are
only expected, not guaranteed; the world state is re-resolved from the
blackboard each time.

Status transitions:

    RUNNING --(best plan is complete)--> COMPLETED
    RUNNING --(no plan to any goal)----> STUCK
    RUNNING --(executor raised)--------> FAILED      (exception re-raised)
    RUNNING --(max_actions reached)----> TERMINATED
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import List, Optional

from contracts.planning import ActionExecutor, Planner
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from planning.plan import Plan
from planning.system import PlanningSystem
from world.blackboard import Blackboard

logger = logging.getLogger(__name__)

MODULE = "agent.process"


class ProcessStatus(Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    STUCK = "stuck"
    FAILED = "failed"
    TERMINATED = "terminated"

    @property
    def is_terminal(self) -> bool:
        return self is not ProcessStatus.RUNNING


class AgentProcess:
    """
    Drives one planning + execution cycle against a single blackboard.

    The blackboard is owned by this process for its lifetime; nothing else
    should mutate it while a tick is in flight.
    """

    def __init__(
        self,
        planner: Planner,
        system: PlanningSystem,
        executor: ActionExecutor,
        blackboard: Blackboard,
        bus: Optional[EventBus] = None,
        history: Optional[List[str]] = None,
        max_actions: int = 100,
        process_id: Optional[str] = None,
    ) -> None:
        self.planner = planner
        self.system = system
        self.executor = executor
        self.blackboard = blackboard
        self.bus = bus or EventBus()
        # shared with resolvers that answer hasRun_ conditions
        self.history: List[str] = history if history is not None else []
        self.max_actions = max_actions
        self.process_id = process_id or uuid.uuid4().hex
        self.status = ProcessStatus.RUNNING
        self.last_plan: Optional[Plan] = None

    def tick(self) -> ProcessStatus:
        """Plan once and execute at most one action."""
        if self.status.is_terminal:
            return self.status

        if len(self.history) >= self.max_actions:
            return self._finish(ProcessStatus.TERMINATED)

        plan = self.planner.best_value_plan_to_any_goal(self.system)
        self.last_plan = plan

        if plan is None:
            logger.info("Process %s is stuck: no plan to any goal", self.process_id)
            self._emit(EventType.PLAN_NOT_FOUND, "No plan to any goal", {
                "goals": sorted(g.name for g in self.system.goals),
            })
            return self._finish(ProcessStatus.STUCK)

        self._emit(EventType.PLAN_FORMULATED, "Plan formulated", {
            "goal": plan.goal.name,
            "actions": plan.action_names(),
            "cost": plan.cost,
            "net_value": plan.net_value,
        })

        if plan.is_complete():
            logger.info("Process %s achieved goal %s", self.process_id, plan.goal.name)
            return self._finish(ProcessStatus.COMPLETED)

        action = plan.actions[0]
        logger.info("Process %s executing %s", self.process_id, action.name)
        try:
            self.executor.execute(action, self.blackboard)
        except Exception as exc:
            self._emit(EventType.ACTION_FAILED, "Action raised an exception", {
                "action": action.name,
                "exception_repr": repr(exc),
            })
            self._finish(ProcessStatus.FAILED)
            raise

        self.history.append(action.name)
        self._emit(EventType.ACTION_EXECUTED, "Action executed", {"action": action.name})
        return self.status

    def run(self) -> ProcessStatus:
        """Tick until a terminal status is reached."""
        while not self.status.is_terminal:
            self.tick()
        return self.status

    # ------------------------------------------------------------------

    def _finish(self, status: ProcessStatus) -> ProcessStatus:
        self.status = status
        self._emit(EventType.PROCESS_FINISHED, f"Process finished: {status.value}", {
            "status": status.value,
            "history": list(self.history),
        })
        return status

    def _emit(self, event_type: EventType, message: str, payload: dict) -> None:
        log_event(
            bus=self.bus,
            module=MODULE,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=self.process_id,
        )
