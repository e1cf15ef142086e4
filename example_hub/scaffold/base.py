"""Shared machinery for materializing standalone example projects.

Both scaffolders follow the same sequence: validate everything that can be
validated without touching the destination, extract identifiers, then build
the project inside a hidden staging directory next to the destination and
rename it into place once complete. A pre-flight failure therefore never
creates the destination, and a failure while copying removes the staging
directory instead of leaving a half-written project behind.
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import shutil
import tempfile
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from example_hub import _constants
from example_hub.errors import (
    DestinationExistsError,
    DuplicateIdentifierError,
    NoIdentifierFoundError,
    PayloadCollisionError,
    SourceMissingError,
    TemplateMissingError,
)
from example_hub.syntax import syntax_for
from example_hub.tree import copy_tree

from .manifest import rewrite_package_manifest

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from example_hub.catalog import Catalog, CatalogEntry

_PROJECT_DIR_MODE = 0o755
_VENDOR_DIR = "vendor"


@dc.dataclass(slots=True)
class GeneratedProject:
    """Summary of a project written by a scaffolder.

    Attributes
    ----------
    path : Path
        Root of the generated project.
    identifiers : list[str]
        Extracted identifiers in catalog order, one per bundled entry.
    entry_keys : list[str]
        Catalog keys bundled into the project.
    used_template : bool
        ``False`` when the template directory was missing and a minimal
        skeleton was synthesized instead.
    files : list[Path]
        Payload and derived files written into the project.
    """

    path: Path
    identifiers: list[str]
    entry_keys: list[str]
    used_template: bool
    files: list[Path] = dc.field(default_factory=list)


@dc.dataclass(slots=True, frozen=True)
class _ResolvedEntry:
    entry: CatalogEntry
    identifier: str
    impl_source: Path
    test_source: Path
    extras: tuple[tuple[Path, Path], ...]

    @property
    def impl_name(self) -> str:
        """Return the implementation file name derived from the identifier."""
        extension = syntax_for(self.impl_source).extension or self.impl_source.suffix
        return f"{self.identifier}{extension}"

    def targets(self, impl_dir: str, test_dir: str) -> list[tuple[Path, Path]]:
        """Return ``(source, project-relative target)`` for every payload file."""
        return [
            (self.impl_source, Path(impl_dir) / self.impl_name),
            (self.test_source, Path(test_dir) / self.test_source.name),
            *self.extras,
        ]


class BaseScaffolder:
    """Common steps shared by the single-entry and category scaffolders."""

    def __init__(self, catalog: Catalog, *, templates_dir: Path | None = None) -> None:
        """Initialize the scaffolder with an injected catalog.

        Parameters
        ----------
        catalog : Catalog
            Catalog providing entries and layout defaults.
        templates_dir : Path, optional
            Directory containing the Jinja templates for derived files;
            defaults to ``example_hub/templates``.
        """
        self.catalog = catalog
        self.layout = catalog.defaults
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def _resolve_entries(
        self, entries: cabc.Sequence[CatalogEntry], dest: Path
    ) -> list[_ResolvedEntry]:
        """Run every pre-flight check and extract identifiers, writing nothing."""
        sources = [self._check_sources(entry) for entry in entries]
        _check_destination(dest)
        resolved: list[_ResolvedEntry] = []
        owners: dict[str, list[str]] = {}
        for entry, (impl, test, extras) in zip(entries, sources, strict=True):
            identifier = self._extract_identifier(impl)
            owners.setdefault(identifier, []).append(entry.key)
            placed = tuple((extra, self._extra_target(extra)) for extra in extras)
            resolved.append(_ResolvedEntry(entry, identifier, impl, test, placed))
        for identifier, keys in owners.items():
            if len(keys) > 1:
                raise DuplicateIdentifierError(identifier, keys)
        self._check_targets(resolved)
        return resolved

    def _check_targets(self, resolved: cabc.Sequence[_ResolvedEntry]) -> None:
        """Reject distinct source files that would share a project path."""
        claims: dict[Path, tuple[Path, str]] = {}
        for item in resolved:
            for source, target in item.targets(self.layout.impl_dir, self.layout.test_dir):
                claimed = claims.setdefault(target, (source, item.entry.key))
                if claimed[0] != source:
                    raise PayloadCollisionError(target, [claimed[1], item.entry.key])

    def _check_sources(self, entry: CatalogEntry) -> tuple[Path, Path, tuple[Path, ...]]:
        """Resolve and verify every source file of ``entry``."""
        resolved = [self.catalog.resolve(path) for path in entry.source_paths]
        for path in resolved:
            if not path.is_file():
                raise SourceMissingError(path)
        impl, test, *extras = resolved
        return impl, test, tuple(extras)

    @staticmethod
    def _extract_identifier(impl: Path) -> str:
        text = impl.read_text(encoding="utf-8")
        identifier = syntax_for(impl).extract_identifier(text)
        if not identifier:
            raise NoIdentifierFoundError(impl)
        return identifier

    @contextlib.contextmanager
    def _staging(self, dest: Path) -> cabc.Iterator[Path]:
        """Yield a staging directory that becomes ``dest`` on success."""
        dest.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{dest.name}-", dir=dest.parent))
        try:
            yield staging
            _check_destination(dest)
            staging.chmod(_PROJECT_DIR_MODE)
            staging.rename(dest)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

    def _materialize_template(self, project: Path) -> bool:
        """Copy the template into ``project`` or synthesize a skeleton.

        Returns ``True`` when the template directory was copied.
        """
        try:
            copy_tree(self.layout.template_dir, project, self.layout.exclude_dirs)
        except TemplateMissingError:
            used_template = False
            for name in self.layout.essential_files:
                source = self.catalog.root / name
                if source.is_file():
                    shutil.copy2(source, project / name)
        else:
            used_template = True
        for folder in (self.layout.impl_dir, self.layout.test_dir):
            _clear_placeholder_files(project / folder)
        for folder in (self.layout.impl_dir, self.layout.test_dir, self.layout.deploy_dir):
            (project / folder).mkdir(parents=True, exist_ok=True)
        return used_template

    def _copy_payload(self, project: Path, resolved: _ResolvedEntry) -> list[Path]:
        """Copy one entry's implementation, test, and extra files."""
        written: list[Path] = []
        for source, relative in resolved.targets(self.layout.impl_dir, self.layout.test_dir):
            target = project / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            written.append(target)
        return written

    def _copy_shared_dirs(self, project: Path) -> list[Path]:
        """Copy configured shared folders once per project."""
        copied: list[Path] = []
        for relative in self.layout.shared_dirs:
            source = self.catalog.root / relative
            target = project / relative
            if not source.is_dir() or target.exists():
                continue
            copy_tree(source, target, self.layout.exclude_dirs)
            copied.append(target)
        return copied

    def _write_deploy_manifest(
        self, project: Path, identifiers: cabc.Sequence[str], deploy_id: str
    ) -> Path:
        template = self.env.get_template("deploy.ts.jinja")
        text = template.render(identifiers=list(identifiers), deploy_id=deploy_id)
        path = project / self.layout.deploy_dir / self.layout.deploy_file
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def _write_package_manifest(
        self,
        project: Path,
        *,
        key: str,
        description: str,
        keywords: cabc.Sequence[str],
    ) -> Path:
        name = _constants.DEFAULT_PACKAGE_NAME.format(
            namespace=self.layout.namespace, key=key
        )
        return rewrite_package_manifest(
            project,
            self.layout.package_manifests,
            name=name,
            description=description,
            keywords=keywords,
        )

    def _write_readme(
        self, project: Path, template_name: str, context: dict[str, typ.Any]
    ) -> Path:
        template = self.env.get_template(template_name)
        text = template.render(layout=self.layout, **context)
        if not text.endswith("\n"):
            text += "\n"
        path = project / "README.md"
        path.write_text(text, encoding="utf-8")
        return path

    def _extra_target(self, path: Path) -> Path:
        """Place an extra file so the payload folders keep one file per entry.

        Extras keep their catalog-relative path. Files sitting directly in the
        implementation or test folder, and files outside the catalog root,
        move into that folder's ``vendor`` subfolder.
        """
        vendor = Path(self.layout.impl_dir) / _VENDOR_DIR
        try:
            relative = path.relative_to(self.catalog.root)
        except ValueError:
            return vendor / path.name
        for folder in (self.layout.impl_dir, self.layout.test_dir):
            if relative.parent == Path(folder):
                return Path(folder) / _VENDOR_DIR / path.name
        return relative


def _check_destination(dest: Path) -> None:
    if dest.exists() or dest.is_symlink():
        raise DestinationExistsError(dest)


def _clear_placeholder_files(folder: Path) -> None:
    """Remove template placeholder files sitting directly inside ``folder``."""
    if not folder.is_dir():
        return
    for child in folder.iterdir():
        if child.is_file():
            child.unlink()


__all__ = ["BaseScaffolder", "GeneratedProject"]
