"""Mirror template directories while skipping build and cache folders.

>>> from pathlib import Path
>>> copy_tree(Path("base-template"), Path("out"), {"node_modules"})  # doctest: +SKIP
"""

from __future__ import annotations

import os
import shutil
import typing as typ

from .errors import TemplateMissingError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def copy_tree(
    source: Path, dest: Path, exclude_dir_names: cabc.Collection[str] = ()
) -> None:
    """Recursively copy ``source`` into ``dest``.

    Parameters
    ----------
    source : Path
        Template directory to mirror.
    dest : Path
        Destination directory; created (with parents) when missing and merged
        into when present.
    exclude_dir_names : Collection[str]
        Base names of directories that are skipped entirely, at any depth.

    Raises
    ------
    TemplateMissingError
        If ``source`` is not an existing directory.
    """
    if not source.is_dir():
        raise TemplateMissingError(source)
    shutil.copytree(
        source,
        dest,
        ignore=_ignore_directories(frozenset(exclude_dir_names)),
        dirs_exist_ok=True,
    )


def _ignore_directories(
    excluded: frozenset[str],
) -> cabc.Callable[[str, list[str]], set[str]]:
    """Build a ``copytree`` ignore callback matching directory names only."""

    def _ignore(directory: str, names: list[str]) -> set[str]:
        return {
            name
            for name in names
            if name in excluded and os.path.isdir(os.path.join(directory, name))
        }

    return _ignore


__all__ = ["copy_tree"]
