# src/contracts/__init__.py

from __future__ import annotations

"""
Protocol seams between the planner core and its collaborators.

  - WorldStateResolver: supplies WorldStates and on-demand conditions
  - Planner:            produces Plans from a PlanningSystem
  - ActionExecutor:     consumes Plans one action at a time
"""

from .planning import ActionExecutor, Planner, WorldStateResolver

__all__ = [
    "ActionExecutor",
    "Planner",
    "WorldStateResolver",
]
