"""Render chapter pages to standalone HTML with highlighted code."""

from __future__ import annotations

import re
import typing as typ
from html import escape
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from .aggregator import ChapterGroup

FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>`{3,})[ \t]*(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n.*?^(?P=fence)[ \t]*$",
    re.DOTALL | re.MULTILINE,
)
HIGHLIGHT_DIV = '<div class="codehilite">'


class HtmlContentRenderer:
    """Render Markdown chapter pages with consistent code styling."""

    def __init__(
        self, pygments_style: str = "monokai", *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        templates_dir : Path, optional
            Directory containing ``chapter_page.html.jinja``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or default_templates)),
            autoescape=select_autoescape(["html", "xml", "html.jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render Markdown into HTML using fenced code and codehilite."""
        if not text.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return _label_blocks(md.convert(text), fence_languages(text))

    def render_page(self, group: ChapterGroup, markdown_text: str) -> str:
        """Return a complete HTML document for one chapter page."""
        template = self.env.get_template("chapter_page.html.jinja")
        return template.render(
            title=group.title,
            content=self.markdown(markdown_text),
            stylesheet=self.stylesheet,
        )


def fence_languages(text: str) -> list[str]:
    """Return the language of every fenced block in ``text``, in order.

    A fence closes only on a line holding the same backtick run, so longer
    fences may wrap code that itself contains triple backticks.
    """
    return [match.group("lang") or "text" for match in FENCED_BLOCK_PATTERN.finditer(text)]


def _label_blocks(html: str, languages: list[str]) -> str:
    """Add a ``data-language`` attribute to each highlighted block."""
    head, *blocks = html.split(HIGHLIGHT_DIV)
    labels = iter(languages)
    parts = [head]
    for block in blocks:
        language = escape(next(labels, "text"), quote=True)
        parts.append(f'<div class="codehilite" data-language="{language}">{block}')
    return "".join(parts)


__all__ = ["HtmlContentRenderer", "fence_languages"]
