"""Error kinds raised by the scaffolding and documentation pipelines.

Every failure the CLI reports derives from :class:`ExampleHubError`. Lookup
failures carry the valid alternatives so callers can render a helpful listing
instead of retrying.

Examples
--------
>>> err = UnknownEntryError("nope", ["fhe-counter", "fhe-add"])
>>> err.valid_keys
('fhe-counter', 'fhe-add')
>>> isinstance(err, LookupError)
True
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class ExampleHubError(RuntimeError):
    """Base class for failures surfaced to the command line."""


class CatalogError(ValueError):
    """Raised when the catalog file is invalid or incomplete."""


class UnknownEntryError(ExampleHubError, LookupError):
    """Raised when a catalog key does not exist."""

    def __init__(self, key: str, valid_keys: cabc.Iterable[str]) -> None:
        self.key = key
        self.valid_keys = tuple(valid_keys)
        super().__init__(f"Unknown example '{key}'.")


class UnknownCategoryError(ExampleHubError, LookupError):
    """Raised when a category has no catalog entries."""

    def __init__(self, category: str, valid_categories: cabc.Iterable[str]) -> None:
        self.category = category
        self.valid_categories = tuple(valid_categories)
        super().__init__(f"Unknown category '{category}'.")


class SourceMissingError(ExampleHubError, FileNotFoundError):
    """Raised when a catalog source file is absent at generation time."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source file not found: {path}")

    def __str__(self) -> str:
        return f"Source file not found: {self.path}"


class DestinationExistsError(ExampleHubError, FileExistsError):
    """Raised when a scaffold destination already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Destination already exists: {path}")

    def __str__(self) -> str:
        return f"Destination already exists: {self.path}"


class TemplateMissingError(ExampleHubError):
    """Raised by the tree copier when the template directory is absent."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Template directory not found: {path}")


class NoIdentifierFoundError(ExampleHubError):
    """Raised when no primary declaration can be located in a source file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No contract declaration found in {path}")


class DuplicateIdentifierError(ExampleHubError):
    """Raised when two bundled entries declare the same identifier."""

    def __init__(self, identifier: str, keys: cabc.Iterable[str]) -> None:
        self.identifier = identifier
        self.keys = tuple(keys)
        joined = ", ".join(self.keys)
        super().__init__(f"Identifier '{identifier}' is declared by: {joined}")


class PayloadCollisionError(ExampleHubError):
    """Raised when two different source files would land on the same path."""

    def __init__(self, target: Path, keys: cabc.Iterable[str]) -> None:
        self.target = target
        self.keys = tuple(keys)
        joined = ", ".join(self.keys)
        super().__init__(f"Payload path '{target}' is claimed by: {joined}")


__all__ = [
    "CatalogError",
    "DestinationExistsError",
    "DuplicateIdentifierError",
    "PayloadCollisionError",
    "ExampleHubError",
    "NoIdentifierFoundError",
    "SourceMissingError",
    "TemplateMissingError",
    "UnknownCategoryError",
    "UnknownEntryError",
]
