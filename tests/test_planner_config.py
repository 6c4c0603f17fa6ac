# tests/test_planner_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from planning.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    AppConfig,
    config_from_dict,
    load_planner_config,
)
from planning.errors import PlanningConfigError


def write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "planner.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_when_sections_absent():
    config = config_from_dict({})

    assert config == AppConfig()
    assert config.planner.max_iterations == 10000
    assert config.planner.simplify_plans is True
    assert config.resolver.defer_cost_threshold is None
    assert config.logging.level == "INFO"
    assert config.logging.level_number == logging.INFO


def test_load_explicit_path(tmp_path: Path):
    path = write(
        tmp_path,
        """
planner:
  max_iterations: 50
  simplify_plans: false
resolver:
  defer_cost_threshold: 0.5
logging:
  level: debug
""",
    )

    config = load_planner_config(path)

    assert config.planner.max_iterations == 50
    assert config.planner.simplify_plans is False
    assert config.resolver.defer_cost_threshold == 0.5
    assert config.logging.level == "DEBUG"


def test_env_var_overrides_default(tmp_path: Path, monkeypatch):
    path = write(tmp_path, "planner:\n  max_iterations: 7\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_planner_config().planner.max_iterations == 7


def test_shipped_default_config_loads(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert DEFAULT_CONFIG_PATH.exists()

    config = load_planner_config()

    assert config.planner.max_iterations == 10000


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_planner_config(tmp_path / "missing.yaml")


def test_non_mapping_top_level(tmp_path: Path):
    with pytest.raises(ValueError):
        load_planner_config(write(tmp_path, "- a\n- b\n"))


@pytest.mark.parametrize(
    "raw",
    [
        {"planner": {"max_iterations": 0}},
        {"planner": {"max_iterations": "many"}},
        {"planner": {"max_iterations": True}},
        {"planner": {"simplify_plans": "yes"}},
        {"resolver": {"defer_cost_threshold": "high"}},
        {"logging": {"level": "LOUD"}},
        {"planner": ["not", "a", "mapping"]},
    ],
)
def test_invalid_values_raise_config_error(raw):
    with pytest.raises(PlanningConfigError):
        config_from_dict(raw)


def test_config_error_is_value_error():
    assert issubclass(PlanningConfigError, ValueError)
