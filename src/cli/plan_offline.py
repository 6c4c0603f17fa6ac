# src/cli/plan_offline.py
"""
Offline GOAP planning over a YAML-defined planning system.

    python -m cli.plan_offline --system config/systems/crime.yaml
    python -m cli.plan_offline --system my.yaml --goal done --state x=true --format table

Exit code 0 when at least one plan is found, 1 otherwise.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from agent.logging_config import configure_logging
from planning.astar import AStarPlanner
from planning.conditions import ConditionValue
from planning.config import load_planner_config
from planning.loader import load_planning_system
from planning.plan import Plan
from planning.system import PlanningSystem
from world.resolver import MapWorldStateResolver


def _parse_state_overrides(items: Sequence[str]) -> Dict[str, ConditionValue]:
    overrides: Dict[str, ConditionValue] = {}
    for item in items:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {item!r}")
        overrides[name] = ConditionValue.parse(raw)
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan offline against a YAML planning system."
    )
    parser.add_argument("--system", required=True, type=Path, help="Planning system YAML file")
    parser.add_argument("--goal", help="Plan to this goal only (default: all goals)")
    parser.add_argument(
        "--state",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Start-state override (true/false/unknown); repeatable",
    )
    parser.add_argument("--prune", action="store_true", help="Also report the pruned action set")
    parser.add_argument("--format", choices=("json", "table"), default="json")
    parser.add_argument("--config", type=Path, help="Planner config YAML (default: config/planner.yaml)")
    parser.add_argument("--log-level", help="Override logging level from config")
    return parser


def _render_table(console: Console, plans: List[Plan], pruned: Optional[PlanningSystem]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Goal")
    table.add_column("Actions")
    table.add_column("Cost", justify="right")
    table.add_column("Net value", justify="right")
    for plan in plans:
        table.add_row(
            plan.goal.name,
            " -> ".join(plan.action_names()) or "(already satisfied)",
            f"{plan.cost:.2f}",
            f"{plan.net_value:.2f}",
        )
    console.print(table)
    if pruned is not None:
        console.print("Pruned actions: " + ", ".join(sorted(a.name for a in pruned.actions)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_planner_config(args.config)
    configure_logging(args.log_level or config.logging.level_number)

    loaded = load_planning_system(args.system)
    system = loaded.system

    try:
        overrides = _parse_state_overrides(args.state)
    except (argparse.ArgumentTypeError, ValueError) as exc:
        parser.error(str(exc))

    start = dict(loaded.world_state or {})
    start.update(overrides)
    # conditions not listed in the file are unset flags, hence FALSE
    resolver = MapWorldStateResolver(start, known_conditions=system.known_conditions())
    planner = AStarPlanner(resolver, config=config.planner)

    if args.goal:
        try:
            goal = system.goal_named(args.goal)
        except KeyError:
            parser.error(f"No goal named {args.goal!r} in {args.system}")
        plan = planner.plan_to_goal(system.actions, goal)
        plans = [plan] if plan is not None else []
        scope = PlanningSystem.for_goal(system.actions, goal)
    else:
        plans = planner.plans_to_goals(system)
        scope = system

    pruned = planner.prune(scope) if args.prune else None

    if args.format == "table":
        _render_table(Console(), plans, pruned)
    else:
        output = {"plans": [p.to_dict() for p in plans]}
        if pruned is not None:
            output["pruned_actions"] = sorted(a.name for a in pruned.actions)
        print(json.dumps(output, indent=2, sort_keys=True))

    return 0 if plans else 1


if __name__ == "__main__":
    sys.exit(main())
