"""Generate one project bundling every entry of a category."""

from __future__ import annotations

import typing as typ

from example_hub.errors import UnknownCategoryError

from .base import BaseScaffolder, GeneratedProject
from .example import _deploy_id

if typ.TYPE_CHECKING:
    from pathlib import Path


class CategoryScaffolder(BaseScaffolder):
    """Materialize all entries sharing a category into a single project."""

    def generate(self, category_key: str, dest: Path) -> GeneratedProject:
        """Create ``dest`` bundling every entry in ``category_key``.

        The implementation folder ends up with exactly one file per entry, and
        the deployment script deploys every extracted identifier in catalog
        order. Shared folders are copied once.

        Raises
        ------
        UnknownCategoryError
            If no entry belongs to ``category_key``.
        SourceMissingError, DestinationExistsError, NoIdentifierFoundError
            As for :class:`~example_hub.scaffold.ExampleScaffolder`.
        DuplicateIdentifierError
            If two entries declare the same contract name.
        PayloadCollisionError
            If two different source files would be copied to the same path.
        """
        entries = self.catalog.entries_in_category(category_key)
        if not entries:
            raise UnknownCategoryError(category_key, self.catalog.all_categories())
        resolved = self._resolve_entries(entries, dest)
        category = self.catalog.category(category_key)
        identifiers = [item.identifier for item in resolved]

        with self._staging(dest) as project:
            used_template = self._materialize_template(project)
            files: list[Path] = []
            for item in resolved:
                files.extend(self._copy_payload(project, item))
            self._copy_shared_dirs(project)
            files.append(
                self._write_deploy_manifest(
                    project, identifiers, _deploy_id(category_key)
                )
            )
            files.append(
                self._write_package_manifest(
                    project,
                    key=category_key,
                    description=category.description or f"{category.title} examples",
                    keywords=[category_key],
                )
            )
            files.append(
                self._write_readme(
                    project,
                    "category_readme.md.jinja",
                    {
                        "category": category,
                        "bundle": [
                            {
                                "entry": item.entry,
                                "identifier": item.identifier,
                                "impl_name": item.impl_name,
                                "test_name": item.test_source.name,
                            }
                            for item in resolved
                        ],
                    },
                )
            )

        return GeneratedProject(
            path=dest,
            identifiers=identifiers,
            entry_keys=[entry.key for entry in entries],
            used_template=used_template,
            files=[dest / path.relative_to(project) for path in files],
        )


__all__ = ["CategoryScaffolder"]
