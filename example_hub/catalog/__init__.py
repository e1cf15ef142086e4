"""Load and query the catalog of reusable example sources.

This subpackage parses the project's ``catalog.yaml`` file, merges layout
defaults, and produces a :class:`Catalog` value that every generator receives
explicitly. The primary entry point is :func:`load_catalog`.

Examples
--------
>>> from pathlib import Path
>>> from example_hub.catalog import load_catalog
>>> catalog = load_catalog(Path("catalog.yaml"))  # doctest: +SKIP
>>> [entry.key for entry in catalog.entries_in_category("basic")]  # doctest: +SKIP
['fhe-counter', 'fhe-add']
"""

from .loader import load_catalog
from .models import Catalog, CatalogEntry, CategoryInfo, ProjectDefaults

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CategoryInfo",
    "ProjectDefaults",
    "load_catalog",
]
