"""Documentation extraction, chapter pages, and the shared index."""

from .aggregator import ChapterGroup, ChapterPageRenderer, group_by_chapter, render_chapter_page
from .extractor import (
    CodeExample,
    DocSection,
    SourceListing,
    extract_section,
    find_chapter,
    section_from_text,
    source_listing,
)
from .generator import DocsGenerator, DocsResult
from .index import INDEX_HEADER, TocIndex, merge_index
from .renderer import HtmlContentRenderer

__all__ = [
    "INDEX_HEADER",
    "ChapterGroup",
    "ChapterPageRenderer",
    "CodeExample",
    "DocSection",
    "DocsGenerator",
    "DocsResult",
    "HtmlContentRenderer",
    "SourceListing",
    "TocIndex",
    "extract_section",
    "find_chapter",
    "group_by_chapter",
    "merge_index",
    "render_chapter_page",
    "section_from_text",
    "source_listing",
]
