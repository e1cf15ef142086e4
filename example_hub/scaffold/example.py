"""Generate a standalone project for a single catalog entry.

Example
-------
>>> from pathlib import Path
>>> from example_hub.catalog import load_catalog
>>> from example_hub.scaffold import ExampleScaffolder
>>> catalog = load_catalog(Path("catalog.yaml"))  # doctest: +SKIP
>>> project = ExampleScaffolder(catalog).generate("fhe-counter", Path("out/a"))  # doctest: +SKIP
>>> project.identifiers  # doctest: +SKIP
['FHECounter']
"""

from __future__ import annotations

import typing as typ

from .base import BaseScaffolder, GeneratedProject

if typ.TYPE_CHECKING:
    from pathlib import Path


class ExampleScaffolder(BaseScaffolder):
    """Materialize one catalog entry on top of the base template."""

    def generate(self, entry_key: str, dest: Path) -> GeneratedProject:
        """Create ``dest`` containing the project for ``entry_key``.

        Parameters
        ----------
        entry_key : str
            Catalog key of the example to generate.
        dest : Path
            Destination directory; must not exist yet.

        Returns
        -------
        GeneratedProject
            Description of the written project.

        Raises
        ------
        UnknownEntryError
            If ``entry_key`` is not in the catalog.
        SourceMissingError
            If a source file of the entry is absent.
        DestinationExistsError
            If ``dest`` already exists.
        NoIdentifierFoundError
            If the implementation file declares no contract.
        """
        entry = self.catalog.lookup(entry_key)
        (resolved,) = self._resolve_entries([entry], dest)
        category = self.catalog.category(entry.category)

        with self._staging(dest) as project:
            used_template = self._materialize_template(project)
            files = self._copy_payload(project, resolved)
            self._copy_shared_dirs(project)
            files.append(
                self._write_deploy_manifest(
                    project, [resolved.identifier], _deploy_id(entry.key)
                )
            )
            files.append(
                self._write_package_manifest(
                    project,
                    key=entry.key,
                    description=entry.description,
                    keywords=[entry.category],
                )
            )
            files.append(
                self._write_readme(
                    project,
                    "example_readme.md.jinja",
                    {
                        "entry": entry,
                        "identifier": resolved.identifier,
                        "impl_name": resolved.impl_name,
                        "category": category,
                        "test_name": resolved.test_source.name,
                    },
                )
            )

        return GeneratedProject(
            path=dest,
            identifiers=[resolved.identifier],
            entry_keys=[entry.key],
            used_template=used_template,
            files=[dest / path.relative_to(project) for path in files],
        )


def _deploy_id(key: str) -> str:
    return key.replace("-", "_")


__all__ = ["ExampleScaffolder"]
