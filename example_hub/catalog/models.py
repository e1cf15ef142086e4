"""Typed dataclasses describing the example catalog."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from example_hub.errors import CatalogError, UnknownEntryError


@dc.dataclass(slots=True, frozen=True)
class CatalogEntry:
    """A reusable implementation/test file pair and its metadata."""

    key: str
    impl_path: Path
    test_path: Path
    description: str
    category: str
    title: str
    extra_files: tuple[Path, ...] = ()
    concepts: tuple[str, ...] = ()

    @property
    def source_paths(self) -> tuple[Path, ...]:
        """Return every file the entry contributes, implementation first."""
        return (self.impl_path, self.test_path, *self.extra_files)


@dc.dataclass(slots=True, frozen=True)
class CategoryInfo:
    """Display metadata for a category of entries."""

    key: str
    title: str
    description: str = ""


@dc.dataclass(slots=True)
class ProjectDefaults:
    """Layout and naming defaults shared by every generated artefact."""

    namespace: str
    template_dir: Path
    output_dir: Path
    docs_dir: Path
    summary_file: str
    impl_dir: str
    test_dir: str
    deploy_dir: str
    deploy_file: str
    exclude_dirs: frozenset[str]
    essential_files: tuple[str, ...]
    shared_dirs: tuple[str, ...]
    package_manifests: tuple[str, ...]

    @property
    def summary_path(self) -> Path:
        """Return the path of the shared table-of-contents document."""
        return self.docs_dir / self.summary_file


@dc.dataclass(slots=True)
class Catalog:
    """In-memory registry of entries keyed by name, in insertion order."""

    root: Path
    defaults: ProjectDefaults
    entries: dict[str, CatalogEntry]
    categories: dict[str, CategoryInfo] = dc.field(default_factory=dict)
    chapters: dict[str, str] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        for key, entry in self.entries.items():
            if key != entry.key:
                msg = f"Entry registered as '{key}' declares key '{entry.key}'."
                raise CatalogError(msg)

    def lookup(self, key: str) -> CatalogEntry:
        """Return the entry for ``key`` or raise with every valid key listed."""
        try:
            return self.entries[key]
        except KeyError as exc:
            raise UnknownEntryError(key, self.entries) from exc

    def entries_in_category(self, category: str) -> list[CatalogEntry]:
        """Return entries sharing ``category`` in catalog order."""
        return [entry for entry in self.entries.values() if entry.category == category]

    def all_categories(self) -> list[str]:
        """Return distinct category keys in first-seen order."""
        seen: dict[str, None] = {}
        for entry in self.entries.values():
            seen.setdefault(entry.category, None)
        return list(seen)

    def category(self, key: str) -> CategoryInfo:
        """Return declared category metadata, deriving a title when undeclared."""
        declared = self.categories.get(key)
        if declared:
            return declared
        return CategoryInfo(key=key, title=_title_from_key(key))

    def chapter_title(self, chapter: str) -> str:
        """Return the display title for a documentation chapter."""
        return self.chapters.get(chapter) or _title_from_key(chapter)

    def resolve(self, path: Path | str) -> Path:
        """Resolve ``path`` against the catalog root unless already absolute."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.root / candidate


def _title_from_key(key: str) -> str:
    return key.replace("-", " ").replace("_", " ").title()


__all__ = ["Catalog", "CatalogEntry", "CategoryInfo", "ProjectDefaults"]
