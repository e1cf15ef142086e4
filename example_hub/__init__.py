"""Generate standalone example projects and documentation from a catalog.

This package backs the ``example-hub`` console script and its
``generate-example``, ``generate-category`` and ``generate-docs`` shortcuts.

Exports
-------
- ``app``: Cyclopts application holding every subcommand.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from example_hub import app
>>> app(["list"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
