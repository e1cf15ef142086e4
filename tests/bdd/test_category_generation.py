"""Behaviour tests for ``generate-category`` using pytest-bdd."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from pytest_bdd import given, parsers, scenarios, then, when

ScenarioState = dict[str, typ.Any]
RunCli = typ.Callable[[list[str]], None]

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "category_generation.feature"
)
scenarios(FEATURE_FILE)

DEPLOY_CALL = re.compile(r'await deploy\("(\w+)"')


@given(parsers.parse('a hub whose "{category}" category has {count:d} examples'))
def given_bulk_hub(
    hub_factory: typ.Callable[..., Path],
    scenario_state: ScenarioState,
    category: str,
    count: int,
) -> None:
    """Build a hub holding ``count`` entries in ``category``."""
    entries = [
        (f"example-{index}", f"Example{index}", category) for index in range(count)
    ]
    scenario_state["root"] = hub_factory(entries, name="bulk").parent


@when(parsers.parse('I generate the category "{category}" into "{dest}"'))
def when_generate_category(
    tmp_path: Path, run_cli: RunCli, category: str, dest: str
) -> None:
    """Run ``generate-category`` for ``category``."""
    run_cli(["generate-category", category, str(tmp_path / dest)])


@then(parsers.parse('"{dest}" has {count:d} implementation files'))
def then_impl_count(tmp_path: Path, dest: str, count: int) -> None:
    """Count top-level files in the implementation folder."""
    files = [path for path in (tmp_path / dest / "contracts").iterdir() if path.is_file()]
    assert len(files) == count, f"expected {count} files, found {len(files)}"


@then(parsers.parse('the deployment script of "{dest}" deploys {count:d} distinct contracts'))
def then_deploy_count(tmp_path: Path, dest: str, count: int) -> None:
    """Count distinct identifiers deployed by the generated script."""
    text = (tmp_path / dest / "deploy" / "deploy.ts").read_text(encoding="utf-8")
    assert len(set(DEPLOY_CALL.findall(text))) == count
