r"""Extract documentation sections from annotated source files.

A source file takes part in the documentation only when it carries an inline
chapter marker such as ``@chapter: basic``. Its block comments become the
section body, and fenced code inside those comments becomes the section's
examples.

Example
-------
>>> text = "/**\n * @chapter: basic\n * Counts things.\n * ```solidity\n * counter.increment();\n * ```\n */"
>>> section = section_from_text(text, title="FHECounter")
>>> (section.chapter, section.body, section.examples[0].code)
('basic', 'Counts things.', 'counter.increment();')
"""

from __future__ import annotations

import dataclasses as dc
import re
import textwrap
import typing as typ

from example_hub.syntax import PLAIN, SourceSyntax, syntax_for

if typ.TYPE_CHECKING:
    from pathlib import Path

CHAPTER_PATTERN = re.compile(r"\bchapter:[ \t]*([A-Za-z0-9][A-Za-z0-9_-]*)")
CHAPTER_LINE_PATTERN = re.compile(r"^[ \t]*@?chapter:.*$\n?", re.MULTILINE)
TITLE_TAG_PATTERN = re.compile(r"^[ \t]*@title[ \t]+(.+?)[ \t]*$", re.MULTILINE)
NATSPEC_PREFIX_PATTERN = re.compile(r"^([ \t]*)@(?:notice|dev)[ \t]+", re.MULTILINE)
FENCE_PATTERN = re.compile(
    r"^[ \t]*```[ \t]*([A-Za-z0-9_+#.-]+)[^\n]*\n(.*?)^[ \t]*```[ \t]*$\n?",
    re.DOTALL | re.MULTILINE,
)
BLANK_RUN_PATTERN = re.compile(r"\n{3,}")


@dc.dataclass(slots=True, frozen=True)
class CodeExample:
    """A fenced code region lifted out of a comment block."""

    language: str
    code: str


@dc.dataclass(slots=True, frozen=True)
class SourceListing:
    """A complete source file printed after its section's examples."""

    name: str
    language: str
    code: str
    folder: str

    @property
    def fence(self) -> str:
        """Return a fence that a triple-backtick run inside ``code`` cannot close."""
        return "````" if "```" in self.code else "```"


@dc.dataclass(slots=True)
class DocSection:
    """Documentation extracted from one source file.

    Attributes
    ----------
    title : str
        Section heading; the file name without its extension unless an
        ``@title`` tag overrides it.
    chapter : str
        Chapter key taken from the inline marker.
    body : str
        Prose from every comment block, joined by blank lines.
    examples : list[CodeExample]
        Fenced code regions in source order.
    source : Path or None
        File the section came from, when extracted from disk.
    listings : list[SourceListing]
        Full sources shown after the examples, attached by the generator.
    """

    title: str
    chapter: str
    body: str
    examples: list[CodeExample] = dc.field(default_factory=list)
    source: Path | None = None
    listings: list[SourceListing] = dc.field(default_factory=list)


def find_chapter(text: str) -> str | None:
    """Return the chapter key named by the first marker in ``text``."""
    match = CHAPTER_PATTERN.search(text)
    return match.group(1) if match else None


def extract_section(path: Path, syntax: SourceSyntax | None = None) -> DocSection | None:
    """Read ``path`` and return its documentation section.

    Returns ``None`` when the file has no chapter marker; that is a
    deliberate skip rather than an error.
    """
    text = path.read_text(encoding="utf-8")
    section = section_from_text(
        text, title=path.stem, syntax=syntax or syntax_for(path)
    )
    if section is not None:
        section.source = path
    return section


def source_listing(path: Path, folder: str) -> SourceListing:
    """Read ``path`` into a listing hinted for ``folder`` of a project."""
    text = path.read_text(encoding="utf-8")
    return SourceListing(
        name=path.name,
        language=syntax_for(path).name,
        code=text.rstrip("\n"),
        folder=folder,
    )


def section_from_text(
    text: str, *, title: str, syntax: SourceSyntax | None = None
) -> DocSection | None:
    """Build a :class:`DocSection` from source ``text``."""
    chapter = find_chapter(text)
    if chapter is None:
        return None
    scanner = syntax or PLAIN

    paragraphs: list[str] = []
    examples: list[CodeExample] = []
    resolved_title = title
    for block in scanner.comment_blocks(text):
        title_match = TITLE_TAG_PATTERN.search(block)
        if title_match and resolved_title == title:
            resolved_title = title_match.group(1)
        for fence in FENCE_PATTERN.finditer(block):
            code = textwrap.dedent(fence.group(2)).rstrip("\n")
            examples.append(CodeExample(language=fence.group(1), code=code))
        prose = _clean_prose(FENCE_PATTERN.sub("", block))
        if prose:
            paragraphs.append(prose)

    return DocSection(
        title=resolved_title,
        chapter=chapter,
        body="\n\n".join(paragraphs),
        examples=examples,
    )


def _clean_prose(block: str) -> str:
    prose = CHAPTER_LINE_PATTERN.sub("", block)
    prose = TITLE_TAG_PATTERN.sub("", prose)
    prose = NATSPEC_PREFIX_PATTERN.sub(r"\1", prose)
    prose = "\n".join(line.rstrip() for line in prose.splitlines())
    return BLANK_RUN_PATTERN.sub("\n\n", prose).strip()


__all__ = [
    "CHAPTER_PATTERN",
    "CodeExample",
    "DocSection",
    "SourceListing",
    "extract_section",
    "find_chapter",
    "section_from_text",
    "source_listing",
]
