"""Shared fixtures that build a throwaway example hub under ``tmp_path``.

The hub mirrors a real repository: a ``base-template`` project with
placeholder sources and dependency folders, payload contracts and tests per
category, and a ``catalog.yaml`` describing them.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

import pytest

from example_hub.catalog import load_catalog

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from example_hub.catalog import Catalog


@dc.dataclass(slots=True, frozen=True)
class HubEntry:
    """Payload entry written into a fixture hub."""

    key: str
    identifier: str
    category: str
    chapter: str | None = None
    extra_files: tuple[str, ...] = ()


DEFAULT_ENTRIES: tuple[HubEntry, ...] = (
    HubEntry("fhe-counter", "FHECounter", "basic", chapter="basic"),
    HubEntry("fhe-add", "FHEAdd", "basic", chapter="basic"),
    HubEntry("plain-store", "PlainStore", "basic"),
    HubEntry("encrypted-vote", "EncryptedVote", "voting", chapter="voting"),
)


def contract_source(identifier: str, chapter: str | None = None) -> str:
    """Return a small Solidity contract, optionally documented for a chapter."""
    doc = ""
    if chapter:
        doc = (
            "/**\n"
            f" * @chapter: {chapter}\n"
            f" * @notice {identifier} keeps an encrypted value.\n"
            " *\n"
            " * ```solidity\n"
            f" * {identifier.lower()}.store(input, proof);\n"
            " * ```\n"
            " */\n"
        )
    return (
        "// SPDX-License-Identifier: MIT\n"
        "pragma solidity ^0.8.24;\n\n"
        f"{doc}"
        f"contract {identifier} is SepoliaConfig {{\n"
        "    uint256 private _value;\n"
        "}\n"
    )


def payload_test_source(identifier: str) -> str:
    """Return a TypeScript test file body for ``identifier``."""
    return (
        'import { expect } from "chai";\n\n'
        f'describe("{identifier}", function () {{\n'
        '  it("deploys", async function () {\n'
        "    expect(true).to.eq(true);\n"
        "  });\n"
        "});\n"
    )


def write_template(root: Path) -> Path:
    """Create a ``base-template`` directory with placeholders and caches."""
    template = root / "base-template"
    (template / "contracts").mkdir(parents=True)
    (template / "test").mkdir()
    (template / "deploy").mkdir()
    (template / "node_modules" / "hardhat").mkdir(parents=True)
    (template / "artifacts").mkdir()
    (template / "hardhat.config.ts").write_text("export default {};\n", encoding="utf-8")
    (template / "package.json").write_text(
        '{\n  "name": "base-template",\n  "version": "0.0.1",\n'
        '  "description": "placeholder",\n  "license": "MIT"\n}\n',
        encoding="utf-8",
    )
    (template / "contracts" / "ExampleContract.sol").write_text(
        "contract ExampleContract {}\n", encoding="utf-8"
    )
    (template / "test" / "ExampleContract.test.ts").write_text(
        "// placeholder\n", encoding="utf-8"
    )
    (template / "deploy" / "deploy.ts").write_text("// placeholder\n", encoding="utf-8")
    (template / "node_modules" / "hardhat" / "index.js").write_text(
        "module.exports = {};\n", encoding="utf-8"
    )
    (template / "artifacts" / "build-info.json").write_text("{}\n", encoding="utf-8")
    return template


def write_hub(
    root: Path,
    entries: cabc.Sequence[HubEntry] = DEFAULT_ENTRIES,
    *,
    with_template: bool = True,
    extra_catalog: str = "",
) -> Path:
    """Write payload files and ``catalog.yaml`` under ``root``; return the catalog path."""
    root.mkdir(parents=True, exist_ok=True)
    if with_template:
        write_template(root)
    lines = ["entries:"]
    for entry in entries:
        contract = root / "contracts" / entry.category / f"{entry.identifier}.sol"
        contract.parent.mkdir(parents=True, exist_ok=True)
        contract.write_text(contract_source(entry.identifier, entry.chapter), encoding="utf-8")
        test = root / "test" / entry.category / f"{entry.identifier}.test.ts"
        test.parent.mkdir(parents=True, exist_ok=True)
        test.write_text(payload_test_source(entry.identifier), encoding="utf-8")
        lines.extend(
            [
                f"  {entry.key}:",
                f"    description: {entry.identifier} example",
                f"    contract: contracts/{entry.category}/{entry.identifier}.sol",
                f"    test: test/{entry.category}/{entry.identifier}.test.ts",
                f"    category: {entry.category}",
                "    concepts:",
                "      - Encrypted state",
            ]
        )
        if entry.extra_files:
            lines.append("    extra_files:")
            lines.extend(f"      - {path}" for path in entry.extra_files)
    catalog_path = root / "catalog.yaml"
    catalog_path.write_text(extra_catalog + "\n".join(lines) + "\n", encoding="utf-8")
    return catalog_path


@pytest.fixture
def hub_root(tmp_path: Path) -> Path:
    """Return the root of a hub populated with the default entries."""
    root = tmp_path / "hub"
    write_hub(
        root,
        extra_catalog=(
            "categories:\n"
            "  basic:\n"
            "    title: Basic Examples\n"
            "    description: Encrypted counters and arithmetic.\n"
            "chapters:\n"
            "  basic: Basic Examples\n"
        ),
    )
    return root


@pytest.fixture
def catalog(hub_root: Path) -> Catalog:
    """Return the loaded catalog of the default hub."""
    return load_catalog(hub_root / "catalog.yaml")


HubFactory = typ.Callable[..., Path]


@pytest.fixture
def hub_factory(tmp_path: Path) -> HubFactory:
    """Return a builder for custom hubs.

    Entries are ``(key, identifier, category[, chapter[, extra_files]])``
    tuples; the builder returns the path of the written ``catalog.yaml``.
    """

    def _build(
        entries: cabc.Iterable[tuple[typ.Any, ...]],
        *,
        name: str = "custom",
        with_template: bool = True,
        extra_catalog: str = "",
    ) -> Path:
        hub_entries = [HubEntry(*item) for item in entries]
        return write_hub(
            tmp_path / name,
            hub_entries,
            with_template=with_template,
            extra_catalog=extra_catalog,
        )

    return _build
