"""Cyclopts CLI entrypoint for generating example projects and documentation.

The ``example-hub`` console script exposes one subcommand per generator, and
``generate-example``, ``generate-category`` and ``generate-docs`` are also
installed as standalone commands. Every command loads the catalog named by
``--catalog`` (or ``EXAMPLE_HUB_CATALOG``) and exits with status 1 when the
pipeline reports an error.

Examples
--------
Scaffold one example into a custom directory:

>>> from example_hub.cli import app
>>> app(["generate-example", "fhe-counter", "out/a"])  # doctest: +SKIP

Regenerate every chapter page without touching ``SUMMARY.md``:

>>> app(["generate-docs", "--all", "--no-index"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from rich.console import Console
from rich.markup import escape

from ._constants import DEFAULT_CATALOG_PATH
from .catalog import load_catalog
from .docs import DocsGenerator
from .errors import (
    CatalogError,
    ExampleHubError,
    UnknownCategoryError,
    UnknownEntryError,
)
from .scaffold import CategoryScaffolder, ExampleScaffolder

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .catalog import Catalog
    from .scaffold import GeneratedProject

DEFAULT_CATALOG = Path(DEFAULT_CATALOG_PATH)

app = App(name="example-hub", config=cyclopts.config.Env("EXAMPLE_HUB_", command=False))  # type: ignore[unknown-argument]

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

CatalogOption = typ.Annotated[
    Path, Parameter(help="Path to the catalog file", env_var="EXAMPLE_HUB_CATALOG")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _fail(exc: Exception) -> typ.NoReturn:
    """Report ``exc`` on stderr, list alternatives, and exit with status 1."""
    err_console.print(f"[bold red]error:[/bold red] {escape(str(exc))}")
    alternatives: cabc.Sequence[str] = ()
    if isinstance(exc, UnknownEntryError):
        err_console.print("Available examples:")
        alternatives = exc.valid_keys
    elif isinstance(exc, UnknownCategoryError):
        err_console.print("Available categories:")
        alternatives = exc.valid_categories
    for name in alternatives:
        err_console.print(f"  - {escape(name)}")
    raise SystemExit(1)


def _load(catalog: Path) -> Catalog:
    try:
        return load_catalog(catalog)
    except (CatalogError, FileNotFoundError, TypeError) as exc:
        _fail(exc)


def _report_project(project: GeneratedProject) -> None:
    console.print(f"wrote {escape(_format_path(project.path))}")
    for identifier in project.identifiers:
        console.print(f"  [green]+[/green] {escape(identifier)}")
    if not project.used_template:
        console.print(
            "[yellow]template directory missing; wrote a minimal skeleton[/yellow]"
        )


@app.command(help="Generate a standalone project for one catalog entry.")
def generate_example(
    entry_key: typ.Annotated[str, Parameter(help="Catalog key of the example")],
    dest: typ.Annotated[
        Path | None, Parameter(help="Destination directory (must not exist)")
    ] = None,
    *,
    catalog: CatalogOption = DEFAULT_CATALOG,
) -> None:
    """Scaffold ``entry_key`` into ``dest`` (default ``<output_dir>/<key>``).

    Parameters
    ----------
    entry_key : str
        Catalog key of the example to generate.
    dest : Path or None, optional
        Destination directory; defaults to the catalog's output folder joined
        with ``entry_key``.
    catalog : Path, optional
        Catalog file (overridable via ``EXAMPLE_HUB_CATALOG``).
    """
    loaded = _load(catalog)
    target = dest or loaded.defaults.output_dir / entry_key
    try:
        project = ExampleScaffolder(loaded).generate(entry_key, target)
    except ExampleHubError as exc:
        _fail(exc)
    _report_project(project)


@app.command(help="Generate one project bundling every entry of a category.")
def generate_category(
    category_key: typ.Annotated[str, Parameter(help="Category to bundle")],
    dest: typ.Annotated[
        Path | None, Parameter(help="Destination directory (must not exist)")
    ] = None,
    *,
    catalog: CatalogOption = DEFAULT_CATALOG,
) -> None:
    """Scaffold every entry of ``category_key`` into one project."""
    loaded = _load(catalog)
    target = dest or loaded.defaults.output_dir / category_key
    try:
        project = CategoryScaffolder(loaded).generate(category_key, target)
    except ExampleHubError as exc:
        _fail(exc)
    _report_project(project)


@app.command(help="Regenerate chapter pages and the shared table of contents.")
def generate_docs(
    entry_key: typ.Annotated[
        str | None, Parameter(help="Regenerate the chapters of this entry only")
    ] = None,
    *,
    all_entries: typ.Annotated[
        bool, Parameter(name="--all", help="Regenerate every chapter")
    ] = False,
    index: typ.Annotated[
        bool, Parameter(help="Merge page links into the table of contents")
    ] = True,
    html: typ.Annotated[
        bool, Parameter(help="Also write highlighted HTML pages")
    ] = False,
    jobs: typ.Annotated[
        int, Parameter(help="Worker threads used for extraction")
    ] = 1,
    catalog: CatalogOption = DEFAULT_CATALOG,
) -> None:
    """Extract chapter pages for one entry or, with ``--all``, every entry.

    ``--no-index`` skips the table-of-contents merge, which is useful when a
    batch of single-entry runs is followed by one final merging run.
    """
    if bool(entry_key) == all_entries:
        err_console.print(
            "[bold red]error:[/bold red] pass exactly one of ENTRY-KEY or --all"
        )
        raise SystemExit(1)
    loaded = _load(catalog)
    try:
        result = DocsGenerator(loaded).generate(
            entry_key, update_index=index, html=html, jobs=max(jobs, 1)
        )
    except ExampleHubError as exc:
        _fail(exc)
    for path in result.skipped:
        console.print(f"[dim]skipped {escape(_format_path(path))} (no chapter marker)[/dim]")
    for path in [*result.pages, *result.html_pages]:
        console.print(f"wrote {escape(_format_path(path))}")
    if result.index is not None:
        console.print(f"updated {escape(_format_path(result.index))}")


@app.command(name="list", help="List catalog entries grouped by category.")
def list_entries(*, catalog: CatalogOption = DEFAULT_CATALOG) -> None:
    """Print every category with its entries and descriptions."""
    loaded = _load(catalog)
    for category_key in loaded.all_categories():
        category = loaded.category(category_key)
        console.print(f"[bold]{escape(category.title)}[/bold] ({escape(category_key)})")
        for entry in loaded.entries_in_category(category_key):
            console.print(f"  - {escape(entry.key)}: {escape(entry.description)}")


def main() -> None:
    """Invoke the Cyclopts application that powers ``example-hub``."""
    app()


def _run_subcommand(name: str) -> None:
    app([name, *sys.argv[1:]])


def generate_example_main() -> None:
    """Console script for ``generate-example``."""
    _run_subcommand("generate-example")


def generate_category_main() -> None:
    """Console script for ``generate-category``."""
    _run_subcommand("generate-category")


def generate_docs_main() -> None:
    """Console script for ``generate-docs``."""
    _run_subcommand("generate-docs")


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
