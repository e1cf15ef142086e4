r"""Lightweight text scanning for payload source languages.

Payload files are never parsed. Each :class:`SourceSyntax` bundles the few
regular expressions needed to find the primary declared identifier and the
structured comment blocks of one language, so another language can be added
without touching the scaffolders or the documentation pipeline.

The declaration scan is line-anchored and does not understand comments or
string literals, so a commented-out ``contract Foo {`` placed before the real
declaration wins.

Example
-------
>>> SOLIDITY.extract_identifier("pragma solidity ^0.8.24;\ncontract FHECounter is SepoliaConfig {\n}")
'FHECounter'
>>> SOLIDITY.comment_blocks("/**\n * @notice Hello\n */")
['@notice Hello']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

BLOCK_COMMENT_PATTERN = re.compile(r"/\*\*?(.*?)\*/", re.DOTALL)
COMMENT_GUTTER_PATTERN = re.compile(r"^[ \t]*\*(?!/) ?", re.MULTILINE)


@dc.dataclass(slots=True, frozen=True)
class SourceSyntax:
    """Text-scanning strategy for one payload language.

    Attributes
    ----------
    name : str
        Language name, also used as the fence tag when documenting the file.
    extension : str
        File extension (with leading dot) given to renamed implementation files.
    declaration_pattern : re.Pattern[str] or None
        Pattern whose first group captures a declared type name; ``None`` when
        the language has no primary declaration to extract.
    comment_pattern : re.Pattern[str]
        Pattern whose first group captures the inside of a comment block.
    """

    name: str
    extension: str
    declaration_pattern: re.Pattern[str] | None
    comment_pattern: re.Pattern[str] = BLOCK_COMMENT_PATTERN

    def extract_identifier(self, text: str) -> str | None:
        """Return the first declared identifier in ``text``, if any."""
        if self.declaration_pattern is None:
            return None
        match = self.declaration_pattern.search(text)
        return match.group(1) if match else None

    def comment_blocks(self, text: str) -> list[str]:
        """Return the cleaned contents of every comment block in source order."""
        blocks: list[str] = []
        for match in self.comment_pattern.finditer(text):
            cleaned = COMMENT_GUTTER_PATTERN.sub("", match.group(1)).strip("\n")
            cleaned = _dedent_prose(cleaned)
            if cleaned.strip():
                blocks.append(cleaned)
        return blocks


def _dedent_prose(text: str) -> str:
    """Strip the indentation shared by all non-blank lines."""
    lines = text.splitlines()
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    margin = min(indents, default=0)
    return "\n".join(line[margin:] for line in lines).strip()


SOLIDITY = SourceSyntax(
    name="solidity",
    extension=".sol",
    declaration_pattern=re.compile(
        r"^\s*(?:abstract\s+)?contract\s+(\w+)(?:\s+is\s+|\s*\{)", re.MULTILINE
    ),
)
TYPESCRIPT = SourceSyntax(
    name="typescript",
    extension=".ts",
    declaration_pattern=re.compile(
        r"^\s*(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+(\w+)"
        r"(?:\s+(?:extends|implements)\s+|\s*\{)",
        re.MULTILINE,
    ),
)
PLAIN = SourceSyntax(name="text", extension="", declaration_pattern=None)

SYNTAX_BY_SUFFIX: dict[str, SourceSyntax] = {
    ".sol": SOLIDITY,
    ".ts": TYPESCRIPT,
    ".js": dc.replace(TYPESCRIPT, name="javascript", extension=".js"),
}


def syntax_for(path: Path) -> SourceSyntax:
    """Return the registered syntax for ``path`` based on its suffix."""
    return SYNTAX_BY_SUFFIX.get(path.suffix.lower(), PLAIN)


__all__ = [
    "PLAIN",
    "SOLIDITY",
    "SYNTAX_BY_SUFFIX",
    "TYPESCRIPT",
    "SourceSyntax",
    "syntax_for",
]
