"""Scaffolders that turn catalog entries into standalone projects."""

from .base import BaseScaffolder, GeneratedProject
from .category import CategoryScaffolder
from .example import ExampleScaffolder
from .manifest import ManifestError, rewrite_package_manifest

__all__ = [
    "BaseScaffolder",
    "CategoryScaffolder",
    "ExampleScaffolder",
    "GeneratedProject",
    "ManifestError",
    "rewrite_package_manifest",
]
