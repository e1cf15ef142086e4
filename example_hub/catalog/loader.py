"""Load the catalog YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from example_hub import _constants
from example_hub.errors import CatalogError

from .helpers import _derive_title, _optional_str, _string_list
from .models import Catalog, CatalogEntry, CategoryInfo, ProjectDefaults


def load_catalog(path: Path) -> Catalog:
    """Load the YAML catalog describing every reusable example.

    Parameters
    ----------
    path : Path
        Filesystem path to the catalog file (for example, ``catalog.yaml``).
        Relative paths inside the catalog are resolved against its parent
        directory.

    Returns
    -------
    Catalog
        Parsed catalog with project defaults, entries in file order, declared
        categories, and chapter titles.

    Raises
    ------
    FileNotFoundError
        If the catalog file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    CatalogError
        If the YAML is malformed (including duplicate keys), no entries are
        defined, or an entry lacks a required field.

    Examples
    --------
    >>> from pathlib import Path
    >>> catalog = load_catalog(Path("catalog.yaml"))  # doctest: +SKIP
    >>> catalog.lookup("fhe-counter").category  # doctest: +SKIP
    'basic'
    """
    if not path.exists():
        msg = f"Catalog file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        try:
            loaded = loader.load(handle) or {}
        except YAMLError as exc:
            msg = f"Cannot parse catalog '{path}': {exc}"
            raise CatalogError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    root = path.resolve().parent

    defaults = _build_defaults(raw.get("defaults") or {}, root)

    entries_raw = raw.get("entries") or {}
    if not entries_raw:
        msg = "No entries defined in catalog."
        raise CatalogError(msg)

    entries: dict[str, CatalogEntry] = {}
    for key, payload in entries_raw.items():
        match payload:
            case dict():
                entries[str(key)] = _build_entry(key=str(key), payload=payload)
            case _:
                msg = f"Entry '{key}' must be a mapping."
                raise CatalogError(msg)

    categories: dict[str, CategoryInfo] = {}
    for key, payload in (raw.get("categories") or {}).items():
        body = payload if isinstance(payload, dict) else {}
        categories[str(key)] = CategoryInfo(
            key=str(key),
            title=_derive_title(str(key), body),
            description=_optional_str(body.get("description")) or "",
        )

    chapters = {
        str(key): str(value).strip()
        for key, value in (raw.get("chapters") or {}).items()
        if _optional_str(value)
    }

    return Catalog(
        root=root,
        defaults=defaults,
        entries=entries,
        categories=categories,
        chapters=chapters,
    )


def _build_defaults(payload: typ.Mapping[str, typ.Any], root: Path) -> ProjectDefaults:
    """Merge the ``defaults`` block over the built-in layout."""

    def _dir(name: str, fallback: str) -> Path:
        return root / str(payload.get(name, fallback))

    def _names(name: str, fallback: tuple[str, ...]) -> tuple[str, ...]:
        if name not in payload:
            return fallback
        return tuple(_string_list(payload.get(name)))

    return ProjectDefaults(
        namespace=str(payload.get("namespace", _constants.DEFAULT_NAMESPACE)),
        template_dir=_dir("template_dir", _constants.DEFAULT_TEMPLATE_DIR),
        output_dir=_dir("output_dir", _constants.DEFAULT_OUTPUT_DIR),
        docs_dir=_dir("docs_dir", _constants.DEFAULT_DOCS_DIR),
        summary_file=str(payload.get("summary_file", _constants.DEFAULT_SUMMARY_FILE)),
        impl_dir=str(payload.get("impl_dir", _constants.DEFAULT_IMPL_DIR)),
        test_dir=str(payload.get("test_dir", _constants.DEFAULT_TEST_DIR)),
        deploy_dir=str(payload.get("deploy_dir", _constants.DEFAULT_DEPLOY_DIR)),
        deploy_file=str(payload.get("deploy_file", _constants.DEFAULT_DEPLOY_FILE)),
        exclude_dirs=frozenset(
            _names("exclude_dirs", _constants.DEFAULT_EXCLUDE_DIRS)
        ),
        essential_files=_names("essential_files", _constants.DEFAULT_ESSENTIAL_FILES),
        shared_dirs=_names("shared_dirs", _constants.DEFAULT_SHARED_DIRS),
        package_manifests=_names(
            "package_manifests", _constants.DEFAULT_PACKAGE_MANIFESTS
        ),
    )


def _build_entry(*, key: str, payload: typ.Mapping[str, typ.Any]) -> CatalogEntry:
    """Build a CatalogEntry for a single catalog item."""
    contract = _optional_str(payload.get("contract"))
    test = _optional_str(payload.get("test"))
    category = _optional_str(payload.get("category"))
    for field, value in (("contract", contract), ("test", test), ("category", category)):
        if not value:
            msg = f"Entry '{key}' is missing '{field}'."
            raise CatalogError(msg)

    description = _optional_str(payload.get("description")) or ""
    return CatalogEntry(
        key=key,
        impl_path=Path(typ.cast("str", contract)),
        test_path=Path(typ.cast("str", test)),
        description=description,
        category=typ.cast("str", category),
        title=_derive_title(key, payload),
        extra_files=tuple(Path(item) for item in _string_list(payload.get("extra_files"))),
        concepts=tuple(_string_list(payload.get("concepts"))),
    )


__all__ = ["load_catalog"]
