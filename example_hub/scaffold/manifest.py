"""Rewrite the package manifest of a generated project.

Only the ``name`` and ``description`` fields are touched; every other field
copied from the template is passed through unchanged. ``package.json`` keeps
its key order, and ``pyproject.toml`` is edited with :mod:`tomlkit` so comments
and formatting survive.
"""

from __future__ import annotations

import collections.abc as cabc
import json
import typing as typ

import tomlkit

from example_hub.errors import ExampleHubError

if typ.TYPE_CHECKING:
    from pathlib import Path


class ManifestError(ExampleHubError):
    """Raised when a template package manifest cannot be rewritten."""


def rewrite_package_manifest(
    project_dir: Path,
    candidates: cabc.Sequence[str],
    *,
    name: str,
    description: str,
    keywords: cabc.Sequence[str] = (),
) -> Path:
    """Rewrite the first manifest found in ``project_dir``.

    Parameters
    ----------
    project_dir : Path
        Root of the project being generated.
    candidates : Sequence[str]
        Manifest file names to look for, in priority order.
    name : str
        Derived package name.
    description : str
        Package description taken from the catalog.
    keywords : Sequence[str], optional
        Keywords used only when a default ``package.json`` must be synthesized.

    Returns
    -------
    Path
        Path of the rewritten (or synthesized) manifest.

    Raises
    ------
    ManifestError
        If an existing manifest is not a mapping at the top level.
    """
    for filename in candidates:
        path = project_dir / filename
        if not path.is_file():
            continue
        if path.suffix == ".toml":
            _rewrite_pyproject(path, name=name, description=description)
        else:
            _rewrite_package_json(path, name=name, description=description)
        return path

    path = project_dir / "package.json"
    payload = default_package_manifest(name, description, keywords)
    path.write_text(_dump_json(payload), encoding="utf-8")
    return path


def default_package_manifest(
    name: str, description: str, keywords: cabc.Sequence[str] = ()
) -> dict[str, typ.Any]:
    """Return the hardhat ``package.json`` used when the template has none."""
    return {
        "name": name,
        "version": "1.0.0",
        "description": description,
        "scripts": {
            "compile": "hardhat compile",
            "test": "hardhat test",
            "deploy": "hardhat deploy --network sepolia",
        },
        "keywords": ["fhevm", "ethereum", *keywords, "privacy"],
        "license": "MIT",
        "devDependencies": {
            "@fhevm/solidity": "^0.8.0",
            "@nomicfoundation/hardhat-toolbox": "^5.0.0",
            "hardhat": "^2.22.0",
            "hardhat-deploy": "^0.12.0",
            "typescript": "^5.0.0",
        },
    }


def _rewrite_package_json(path: Path, *, name: str, description: str) -> None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Cannot parse {path.name}: {exc}"
        raise ManifestError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a JSON object."
        raise ManifestError(msg)
    if "name" in data:
        data["name"] = name
    else:
        data = {"name": name, **data}
    if "description" in data:
        data["description"] = description
    else:
        data = _insert_after(data, "name", "description", description)
    path.write_text(_dump_json(data), encoding="utf-8")


def _rewrite_pyproject(path: Path, *, name: str, description: str) -> None:
    document = tomlkit.parse(path.read_text(encoding="utf-8"))
    project = document.get("project")
    if project is None:
        project = tomlkit.table()
        document["project"] = project
    elif not isinstance(project, cabc.MutableMapping):
        msg = f"{path.name} has a non-table [project] entry."
        raise ManifestError(msg)
    project["name"] = name
    project["description"] = description
    path.write_text(tomlkit.dumps(document), encoding="utf-8")


def _insert_after(
    data: dict[str, typ.Any], anchor: str, key: str, value: object
) -> dict[str, typ.Any]:
    result: dict[str, typ.Any] = {}
    for existing, existing_value in data.items():
        result[existing] = existing_value
        if existing == anchor:
            result[key] = value
    result.setdefault(key, value)
    return result


def _dump_json(payload: dict[str, typ.Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


__all__ = ["ManifestError", "default_package_manifest", "rewrite_package_manifest"]
