# src/planning/loader.py
"""
Load PlanningSystems (and optional start states) from YAML.

Shape:

    actions:
      - name: cook
        pre: [has_stove]            # shorthand: each name required TRUE
        effects: {has_food: true}   # explicit values: true/false/unknown
        cost: 0.2
        value: 0.0
    goals:
      - name: fed
        preconditions: {has_food: true}
        value: 1.0
    world_state:
      has_stove: true

`pre`/`post` lists and `preconditions`/`effects` mappings may be combined;
mapping entries win.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .conditions import ConditionValue
from .steps import Action, Goal, effect_spec
from .system import PlanningSystem
from .world_state import WorldState

# Example planning systems shipped with the repo
CONFIG_SYSTEMS_DIR = Path(__file__).resolve().parents[2] / "config" / "systems"


@dataclass(frozen=True)
class LoadedSystem:
    """A planning system plus the start state declared next to it, if any."""
    system: PlanningSystem
    world_state: Optional[WorldState]
    source: Optional[Path] = None


def _load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load a YAML file into a dict.

    Returns an empty dict if the file is empty, rather than None.
    """
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data or {}


def parse_effect_spec(raw: Optional[Mapping[str, Any]], names: Optional[List[str]] = None) -> Dict[str, ConditionValue]:
    """Combine a list of TRUE names with an explicit name -> value mapping."""
    spec = effect_spec(names or [])
    if raw:
        if not isinstance(raw, Mapping):
            raise ValueError(f"Expected mapping of condition values, got {type(raw)}")
        for key, value in raw.items():
            spec[str(key)] = ConditionValue.parse(value)
    return spec


def _parse_action(raw: Dict[str, Any]) -> Action:
    if "name" not in raw:
        raise ValueError(f"Action entry without a name: {raw!r}")
    return Action(
        name=str(raw["name"]),
        preconditions=parse_effect_spec(raw.get("preconditions"), raw.get("pre")),
        effects=parse_effect_spec(raw.get("effects"), raw.get("post")),
        cost=float(raw.get("cost", 0.0)),
        value=float(raw.get("value", 0.0)),
    )


def _parse_goal(raw: Dict[str, Any]) -> Goal:
    if "name" not in raw:
        raise ValueError(f"Goal entry without a name: {raw!r}")
    preconditions: Optional[Dict[str, ConditionValue]] = None
    if raw.get("preconditions") is not None or raw.get("pre") is not None:
        preconditions = parse_effect_spec(raw.get("preconditions"), raw.get("pre"))
    return Goal(
        name=str(raw["name"]),
        preconditions=preconditions,
        value=float(raw.get("value", 0.0)),
        description=str(raw.get("description", "")),
    )


def load_planning_system_from_dict(raw: Dict[str, Any], source: Optional[Path] = None) -> LoadedSystem:
    actions = [_parse_action(a) for a in raw.get("actions", []) or []]
    goals = [_parse_goal(g) for g in raw.get("goals", []) or []]

    # PlanningSystem would silently collapse identical entries; catch them here
    for kind, names in (("action", [a.name for a in actions]), ("goal", [g.name for g in goals])):
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            where = f" in '{source}'" if source else ""
            raise ValueError(f"Duplicate {kind} name(s) {duplicates}{where}")

    world_raw = raw.get("world_state")
    world_state = WorldState(parse_effect_spec(world_raw)) if world_raw is not None else None

    return LoadedSystem(
        system=PlanningSystem(actions=frozenset(actions), goals=frozenset(goals)),
        world_state=world_state,
        source=source,
    )


def load_planning_system(path: Path) -> LoadedSystem:
    """Parse a single planning-system YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Planning system file does not exist: {path}")
    return load_planning_system_from_dict(_load_yaml(path), source=path)


def load_all_planning_systems(systems_dir: Optional[Path] = None) -> Dict[str, LoadedSystem]:
    """
    Load every *.yaml under `systems_dir` (default config/systems/),
    keyed by file stem.
    """
    base_dir = systems_dir or CONFIG_SYSTEMS_DIR
    if not base_dir.exists():
        raise FileNotFoundError(f"Systems directory does not exist: {base_dir}")
    return {path.stem: load_planning_system(path) for path in sorted(base_dir.glob("*.yaml"))}
