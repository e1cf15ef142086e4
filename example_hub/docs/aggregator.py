"""Group documentation sections by chapter and render chapter pages."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from example_hub import _constants

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .extractor import DocSection


@dc.dataclass(slots=True)
class ChapterGroup:
    """Sections sharing one chapter key, in first-seen order."""

    chapter: str
    title: str
    sections: list[DocSection] = dc.field(default_factory=list)

    @property
    def page_name(self) -> str:
        """Return the Markdown file name of the chapter page."""
        return f"{self.chapter}.md"


def group_by_chapter(
    sections: cabc.Iterable[DocSection],
    titles: cabc.Callable[[str], str] | None = None,
) -> list[ChapterGroup]:
    """Group ``sections`` by chapter, keeping first-seen chapter order.

    Parameters
    ----------
    sections : Iterable[DocSection]
        Extracted sections in source order.
    titles : Callable[[str], str], optional
        Maps a chapter key to its display title; the key itself is used when
        omitted.

    Returns
    -------
    list[ChapterGroup]
        One group per distinct chapter.
    """
    groups: dict[str, ChapterGroup] = {}
    for section in sections:
        group = groups.get(section.chapter)
        if group is None:
            title = titles(section.chapter) if titles else section.chapter
            group = ChapterGroup(chapter=section.chapter, title=title)
            groups[section.chapter] = group
        group.sections.append(section)
    return list(groups.values())


class ChapterPageRenderer:
    """Render a :class:`ChapterGroup` into a Markdown page via Jinja."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "html.jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, group: ChapterGroup) -> str:
        """Return the Markdown page for ``group``.

        Sections carrying full source listings are followed by a usage block
        listing the project's build commands.
        """
        template = self.env.get_template("chapter_page.md.jinja")
        text = template.render(group=group, usage=_constants.USAGE_COMMANDS)
        return text.rstrip("\n") + "\n"


def render_chapter_page(group: ChapterGroup) -> str:
    """Render ``group`` with the bundled chapter page template."""
    return ChapterPageRenderer().render(group)


__all__ = ["ChapterGroup", "ChapterPageRenderer", "group_by_chapter", "render_chapter_page"]
