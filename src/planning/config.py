# src/planning/config.py
"""
Planner configuration loaded from config/planner.yaml.

Layout:

    planner:
      max_iterations: 10000     # A* expansion guard
      simplify_plans: true      # drop actions that don't contribute
    resolver:
      defer_cost_threshold: null  # named conditions costing more -> UNKNOWN
    logging:
      level: INFO

Every key is optional; absent keys take the dataclass defaults.
Set GOAP_PLANNER_CONFIG to load a different file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import PlanningConfigError


PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "planner.yaml"

CONFIG_ENV_VAR = "GOAP_PLANNER_CONFIG"


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlannerConfig:
    max_iterations: int = 10000
    simplify_plans: bool = True


@dataclass(frozen=True)
class ResolverConfig:
    # None disables deferral: every named condition is evaluated eagerly
    defer_cost_threshold: Optional[float] = None


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"

    @property
    def level_number(self) -> int:
        return logging.getLevelName(self.level)


@dataclass(frozen=True)
class AppConfig:
    """Top-level resolved configuration."""
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping, failing loudly on missing files or bad shapes."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise PlanningConfigError(f"'{name}' section must be a mapping, got {type(section)}")
    return section


def _parse_planner(raw: Dict[str, Any]) -> PlannerConfig:
    defaults = PlannerConfig()
    max_iterations = raw.get("max_iterations", defaults.max_iterations)
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations <= 0:
        raise PlanningConfigError(f"planner.max_iterations must be a positive int, got {max_iterations!r}")
    simplify = raw.get("simplify_plans", defaults.simplify_plans)
    if not isinstance(simplify, bool):
        raise PlanningConfigError(f"planner.simplify_plans must be a bool, got {simplify!r}")
    return PlannerConfig(max_iterations=max_iterations, simplify_plans=simplify)


def _parse_resolver(raw: Dict[str, Any]) -> ResolverConfig:
    threshold = raw.get("defer_cost_threshold")
    if threshold is not None:
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise PlanningConfigError(
                f"resolver.defer_cost_threshold must be a number or null, got {threshold!r}"
            )
        threshold = float(threshold)
    return ResolverConfig(defer_cost_threshold=threshold)


def _parse_logging(raw: Dict[str, Any]) -> LoggingConfig:
    level = str(raw.get("level", LoggingConfig().level)).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise PlanningConfigError(f"logging.level '{level}' is not a known logging level")
    return LoggingConfig(level=level)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def config_from_dict(raw: Dict[str, Any]) -> AppConfig:
    return AppConfig(
        planner=_parse_planner(_section(raw, "planner")),
        resolver=_parse_resolver(_section(raw, "resolver")),
        logging=_parse_logging(_section(raw, "logging")),
    )


def load_planner_config(path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate planner configuration.

    Resolution order: explicit `path`, then $GOAP_PLANNER_CONFIG, then
    config/planner.yaml in the project root.
    """
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    return config_from_dict(_load_yaml(Path(path)))
