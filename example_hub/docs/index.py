r"""Maintain the shared table-of-contents document.

The index is a Markdown file holding ``## <chapter>`` groups of bullet links.
:func:`merge_index` is the only operation that edits it, and it is idempotent:
a target that is already linked leaves the text untouched.

Example
-------
>>> text = "# Table of contents\n\n* [Introduction](README.md)\n"
>>> merged = merge_index(text, "Basic", "Basic", "basic.md")
>>> merged.endswith("## Basic\n\n* [Basic](basic.md)\n")
True
>>> merge_index(merged, "Basic", "Basic", "basic.md") == merged
True
"""

from __future__ import annotations

import re
import threading
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

INDEX_HEADER = "# Table of contents\n\n* [Introduction](README.md)\n"
CHAPTER_HEADING_LEVEL = 2
HEADING_PATTERN = re.compile(r"^(#{1,6})(?:[ \t]|$)")


def format_link(label: str, target: str) -> str:
    """Return the bullet line linking ``label`` to ``target``."""
    return f"* [{label}]({target})"


def merge_index(text: str, chapter_key: str, label: str, target: str) -> str:
    """Insert a link to ``target`` under the ``chapter_key`` heading.

    Parameters
    ----------
    text : str
        Current index document.
    chapter_key : str
        Heading text of the chapter group.
    label : str
        Link label.
    target : str
        Link target, normally the chapter page file name.

    Returns
    -------
    str
        ``text`` unchanged when ``target`` is already linked; otherwise the
        document with the link appended to the chapter group, creating the
        group at the end when it does not exist.
    """
    if f"]({target})" in text:
        return text
    link = format_link(label, target)
    lines = text.splitlines()
    heading = f"{'#' * CHAPTER_HEADING_LEVEL} {chapter_key}"
    start = next(
        (index for index, line in enumerate(lines) if line.strip() == heading),
        None,
    )
    if start is None:
        prefix = text.rstrip()
        if not prefix:
            return f"{heading}\n\n{link}\n"
        return f"{prefix}\n\n{heading}\n\n{link}\n"

    end = _next_heading(lines, start + 1, CHAPTER_HEADING_LEVEL)
    last_content = max(
        (index for index in range(start + 1, end) if lines[index].strip()),
        default=None,
    )
    if last_content is None:
        lines[start + 1 : start + 1] = ["", link]
    else:
        lines.insert(last_content + 1, link)
    return "\n".join(lines) + "\n"


def _next_heading(lines: list[str], begin: int, level: int) -> int:
    """Return the index of the next heading at ``level`` or higher."""
    for index in range(begin, len(lines)):
        match = HEADING_PATTERN.match(lines[index])
        if match and len(match.group(1)) <= level:
            return index
    return len(lines)


class TocIndex:
    """The shared table-of-contents file, guarded by a lock.

    ``merge`` reads, merges and writes under the lock, so concurrent callers
    never interleave their rewrites. The file is only rewritten when the merge
    changes it.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    def read(self) -> str:
        """Return the index text, or the default header when absent."""
        if not self.path.exists():
            return INDEX_HEADER
        return self.path.read_text(encoding="utf-8")

    def merge(self, chapter_key: str, label: str, target: str) -> bool:
        """Merge one link into the file; return ``True`` if it changed."""
        with self._lock:
            exists = self.path.exists()
            current = self.read()
            merged = merge_index(current, chapter_key, label, target)
            if exists and merged == current:
                return False
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(merged, encoding="utf-8")
            return True


__all__ = ["INDEX_HEADER", "TocIndex", "format_link", "merge_index"]
