"""Step definitions shared by the generation scenarios."""

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import given, parsers, then

from example_hub.cli import app

if typ.TYPE_CHECKING:
    from pathlib import Path

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@pytest.fixture
def run_cli(
    scenario_state: ScenarioState, capsys: pytest.CaptureFixture[str]
) -> typ.Callable[[list[str]], None]:
    """Return a runner that invokes ``app`` and records its outcome."""

    def _run(argv: list[str]) -> None:
        catalog = typ.cast("Path", scenario_state["root"]) / "catalog.yaml"
        try:
            app([*argv, "--catalog", str(catalog)])
        except SystemExit as exc:
            code = int(exc.code or 0)
        else:
            code = 0
        captured = capsys.readouterr()
        scenario_state["code"] = code
        scenario_state["out"] = captured.out
        scenario_state["err"] = captured.err

    return _run


@given("a hub with a documented counter example")
def given_default_hub(hub_root: Path, scenario_state: ScenarioState) -> None:
    """Use the default fixture hub as the scenario's catalog."""
    scenario_state["root"] = hub_root


@given(parsers.parse('an empty directory "{name}"'))
def given_empty_directory(tmp_path: Path, name: str) -> None:
    """Create an empty directory under the scenario's temporary folder."""
    (tmp_path / name).mkdir(parents=True)


@then("the command succeeds")
def then_succeeds(scenario_state: ScenarioState) -> None:
    """Assert the last command exited with status 0."""
    assert scenario_state["code"] == 0, (
        f"expected success, got {scenario_state['code']}: {scenario_state['err']}"
    )


@then("the command fails")
def then_fails(scenario_state: ScenarioState) -> None:
    """Assert the last command exited with a nonzero status."""
    assert scenario_state["code"] != 0, "expected a nonzero exit status"
