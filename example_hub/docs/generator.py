"""Regenerate chapter pages and the shared index from catalog sources.

Example
-------
>>> from pathlib import Path
>>> from example_hub.catalog import load_catalog
>>> from example_hub.docs import DocsGenerator
>>> catalog = load_catalog(Path("catalog.yaml"))  # doctest: +SKIP
>>> result = DocsGenerator(catalog).generate("fhe-counter")  # doctest: +SKIP
>>> [path.name for path in result.pages]  # doctest: +SKIP
['basic.md']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from concurrent.futures import ThreadPoolExecutor

from example_hub.errors import SourceMissingError

from .aggregator import ChapterGroup, ChapterPageRenderer, group_by_chapter
from .extractor import DocSection, extract_section, source_listing
from .index import TocIndex
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from example_hub.catalog import Catalog, CatalogEntry


@dc.dataclass(slots=True)
class DocsResult:
    """Files touched by one documentation run.

    Attributes
    ----------
    pages : list[Path]
        Markdown chapter pages written, in chapter order.
    index : Path or None
        The table-of-contents file, or ``None`` when merging was skipped.
    skipped : list[Path]
        Source files without a chapter marker.
    html_pages : list[Path]
        HTML renderings written alongside the Markdown pages.
    """

    pages: list[Path] = dc.field(default_factory=list)
    index: Path | None = None
    skipped: list[Path] = dc.field(default_factory=list)
    html_pages: list[Path] = dc.field(default_factory=list)


class DocsGenerator:
    """Extract, group, render, and index documentation for catalog entries."""

    def __init__(self, catalog: Catalog, *, templates_dir: Path | None = None) -> None:
        self.catalog = catalog
        self.layout = catalog.defaults
        self.page_renderer = ChapterPageRenderer(templates_dir=templates_dir)
        self.templates_dir = templates_dir
        self.toc = TocIndex(self.layout.summary_path)

    def generate(
        self,
        entry_key: str | None = None,
        *,
        update_index: bool = True,
        html: bool = False,
        jobs: int = 1,
    ) -> DocsResult:
        """Regenerate documentation for one entry or the whole catalog.

        Parameters
        ----------
        entry_key : str, optional
            Regenerate only the chapters this entry contributes to. Every
            chapter page is rebuilt from all contributing entries so that a
            single-entry run never drops sections written by a full run.
            ``None`` regenerates every chapter.
        update_index : bool, optional
            Merge a link for each written page into the shared index.
        html : bool, optional
            Also write an HTML rendering of each page.
        jobs : int, optional
            Number of worker threads used for extraction.

        Raises
        ------
        UnknownEntryError
            If ``entry_key`` is not in the catalog.
        SourceMissingError
            If a source of the requested entry is missing. A full run fails
            on any missing source; a single-entry run ignores missing files of
            the other entries it scans while rebuilding its chapters.
        """
        result = DocsResult()
        chapters: set[str] | None = None
        if entry_key is not None:
            entry = self.catalog.lookup(entry_key)
            own_sections, own_skipped = self._extract([entry], jobs)
            result.skipped.extend(own_skipped)
            chapters = {section.chapter for section in own_sections}
            if not chapters:
                return result

        sections, skipped = self._extract(
            list(self.catalog.entries.values()), jobs, strict=chapters is None
        )
        if chapters is None:
            result.skipped.extend(skipped)
        else:
            sections = [section for section in sections if section.chapter in chapters]

        self._attach_listings(sections)
        groups = group_by_chapter(sections, self.catalog.chapter_title)
        html_renderer = (
            HtmlContentRenderer(templates_dir=self.templates_dir) if html else None
        )
        for group in groups:
            result.pages.append(self._write_page(group, html_renderer, result))

        if update_index:
            for group in groups:
                self.toc.merge(group.title, group.title, group.page_name)
            result.index = self.toc.path
        return result

    def _extract(
        self, entries: cabc.Sequence[CatalogEntry], jobs: int, *, strict: bool = True
    ) -> tuple[list[DocSection], list[Path]]:
        """Extract sections from every source file of ``entries`` in order.

        A missing file raises :class:`SourceMissingError` when ``strict`` is
        set and is left out otherwise.
        """
        paths = _unique_paths(
            self.catalog.resolve(path)
            for entry in entries
            for path in entry.source_paths
        )
        missing = [path for path in paths if not path.is_file()]
        if missing and strict:
            raise SourceMissingError(missing[0])
        paths = [path for path in paths if path not in missing]
        if jobs > 1:
            with ThreadPoolExecutor(max_workers=jobs) as pool:
                extracted = list(pool.map(extract_section, paths))
        else:
            extracted = [extract_section(path) for path in paths]

        sections: list[DocSection] = []
        skipped: list[Path] = []
        for path, section in zip(paths, extracted, strict=True):
            if section is None:
                skipped.append(path)
            else:
                sections.append(section)
        return sections, skipped

    def _attach_listings(self, sections: cabc.Sequence[DocSection]) -> None:
        """Attach full source listings to every extracted section.

        A section from an implementation file also lists the entry's test
        file, unless that test carries its own section.
        """
        tests = {
            self.catalog.resolve(entry.impl_path): self.catalog.resolve(entry.test_path)
            for entry in self.catalog.entries.values()
        }
        test_paths = set(tests.values())
        documented = {section.source for section in sections}
        for section in sections:
            if section.source is None:
                continue
            folder = (
                self.layout.test_dir
                if section.source in test_paths
                else self.layout.impl_dir
            )
            section.listings.append(source_listing(section.source, folder))
            test = tests.get(section.source)
            if test is not None and test not in documented and test.is_file():
                section.listings.append(source_listing(test, self.layout.test_dir))

    def _write_page(
        self,
        group: ChapterGroup,
        html_renderer: HtmlContentRenderer | None,
        result: DocsResult,
    ) -> Path:
        docs_dir = self.layout.docs_dir
        docs_dir.mkdir(parents=True, exist_ok=True)
        text = self.page_renderer.render(group)
        page = docs_dir / group.page_name
        page.write_text(text, encoding="utf-8")
        if html_renderer is not None:
            html_page = page.with_suffix(".html")
            html_page.write_text(html_renderer.render_page(group, text), encoding="utf-8")
            result.html_pages.append(html_page)
        return page


def _unique_paths(paths: cabc.Iterable[Path]) -> list[Path]:
    seen: dict[Path, None] = {}
    for path in paths:
        seen.setdefault(path, None)
    return list(seen)


__all__ = ["DocsGenerator", "DocsResult"]
