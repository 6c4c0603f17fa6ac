# tests/test_cli_plan_offline.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.plan_offline import main
from planning.config import CONFIG_ENV_VAR
from planning.loader import CONFIG_SYSTEMS_DIR

CRIME = str(CONFIG_SYSTEMS_DIR / "crime.yaml")
HELLO = str(CONFIG_SYSTEMS_DIR / "hello_world.yaml")


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def run_json(capsys, *argv: str):
    code = main(["--log-level", "WARNING", *argv])
    return code, json.loads(capsys.readouterr().out)


def test_plans_to_every_goal_best_first(capsys):
    code, output = run_json(capsys, "--system", CRIME)

    assert code == 0
    assert [p["goal"] for p in output["plans"]] == ["getAwayWithMurder", "hasGun"]
    best = output["plans"][0]
    assert len(best["actions"]) == 7
    assert best["cost"] == pytest.approx(8.8)
    assert "pruned_actions" not in output


def test_single_goal(capsys):
    code, output = run_json(capsys, "--system", CRIME, "--goal", "hasGun")

    assert code == 0
    assert output["plans"][0]["actions"] == ["Cook drugs", "Sell drugs", "Buy gun"]


def test_state_overrides_start_state(capsys):
    code, output = run_json(capsys, "--system", HELLO, "--state", "said_hello=true")

    assert code == 0
    plan = output["plans"][0]
    assert plan["actions"] == []
    assert plan["start_state"] == {"has_greeting": "FALSE", "said_hello": "TRUE"}


def test_prune_lists_used_actions(capsys):
    code, output = run_json(capsys, "--system", CRIME, "--prune")

    assert code == 0
    assert output["pruned_actions"] == ["Bribe cop", "Buy gun", "Cook drugs", "Sell drugs", "Shoot enemy"]


def test_prune_with_goal_only_considers_that_goal(capsys):
    code, output = run_json(capsys, "--system", CRIME, "--goal", "hasGun", "--prune")

    assert code == 0
    assert output["pruned_actions"] == ["Buy gun", "Cook drugs", "Sell drugs"]
    assert output["pruned_actions"] == sorted(output["plans"][0]["actions"])


def test_unlisted_conditions_start_false(tmp_path: Path, capsys):
    path = tmp_path / "door.yaml"
    path.write_text(
        "actions:\n"
        "  - name: open_door\n"
        "    preconditions: {door_open: false}\n"
        "    effects: {door_open: true}\n"
        "goals:\n"
        "  - name: entered\n"
        "    preconditions: {door_open: true}\n",
        encoding="utf-8",
    )

    code, output = run_json(capsys, "--system", str(path))

    assert code == 0
    plan = output["plans"][0]
    assert plan["actions"] == ["open_door"]
    assert plan["start_state"] == {"door_open": "FALSE"}


def test_no_plan_exits_1(tmp_path: Path, capsys):
    path = tmp_path / "stuck.yaml"
    path.write_text(
        "actions:\n  - name: a\n    pre: [never]\n    post: [done]\ngoals:\n  - name: done\n",
        encoding="utf-8",
    )

    code, output = run_json(capsys, "--system", str(path))

    assert code == 1
    assert output == {"plans": []}


def test_table_format(capsys):
    code = main(["--log-level", "WARNING", "--system", CRIME, "--prune", "--format", "table"])

    out = capsys.readouterr().out
    assert code == 0
    assert "hasGun" in out
    assert "Pruned actions:" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["--system", HELLO, "--state", "said_hello"],
        ["--system", HELLO, "--state", "said_hello=maybe"],
        ["--system", HELLO, "--goal", "nope"],
    ],
)
def test_bad_arguments_exit_with_usage_error(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-level", "WARNING", *argv])
    assert excinfo.value.code == 2


def test_custom_config_file(tmp_path: Path, capsys):
    config = tmp_path / "planner.yaml"
    config.write_text("planner:\n  max_iterations: 1\n", encoding="utf-8")

    code, output = run_json(capsys, "--system", HELLO, "--config", str(config))

    assert code == 1
    assert output["plans"] == []
