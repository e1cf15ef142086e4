"""Unit tests for chapter page generation and index maintenance."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from example_hub.docs import DocsGenerator, TocIndex, group_by_chapter, render_chapter_page
from example_hub.docs.extractor import CodeExample, DocSection
from example_hub.docs.renderer import fence_languages
from example_hub.errors import SourceMissingError, UnknownEntryError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

    from example_hub.catalog import Catalog


def _sections() -> list[DocSection]:
    return [
        DocSection("A", "basic", "Alpha.", [CodeExample("solidity", "a();")]),
        DocSection("V", "voting", "Vote."),
        DocSection("B", "basic", ""),
    ]


def test_group_by_chapter_first_seen_order() -> None:
    groups = group_by_chapter(_sections(), str.upper)
    assert [(group.chapter, group.title) for group in groups] == [
        ("basic", "BASIC"),
        ("voting", "VOTING"),
    ]
    assert [section.title for section in groups[0].sections] == ["A", "B"]
    assert groups[0].page_name == "basic.md"


def test_render_chapter_page() -> None:
    group = group_by_chapter(_sections())[0]
    assert render_chapter_page(group) == (
        "# basic\n"
        "\n"
        "## A\n"
        "\n"
        "Alpha.\n"
        "\n"
        "```solidity\n"
        "a();\n"
        "```\n"
        "\n"
        "---\n"
        "\n"
        "## B\n"
    )


def test_single_entry_writes_its_chapter(catalog: Catalog, hub_root: Path) -> None:
    result = DocsGenerator(catalog).generate("fhe-counter")
    docs = hub_root / "docs"

    assert result.pages == [catalog.defaults.docs_dir / "basic.md"]
    page = (docs / "basic.md").read_text(encoding="utf-8")
    assert page.startswith("# Basic Examples\n")
    assert "## FHECounter" in page
    assert "## FHEAdd" in page, "expected every contributor to the chapter"
    assert "EncryptedVote" not in page
    assert page.index("## FHECounter") < page.index("## FHEAdd")
    assert "fhecounter.store(input, proof);" in page
    assert not (docs / "voting.md").exists()

    summary = (docs / "SUMMARY.md").read_text(encoding="utf-8")
    assert summary.startswith("# Table of contents\n\n* [Introduction](README.md)\n")
    assert "## Basic Examples\n\n* [Basic Examples](basic.md)\n" in summary
    assert result.index == catalog.defaults.summary_path


def test_regeneration_is_idempotent(catalog: Catalog, hub_root: Path) -> None:
    generator = DocsGenerator(catalog)
    generator.generate("fhe-counter")
    summary = hub_root / "docs" / "SUMMARY.md"
    first = summary.read_bytes()
    generator.generate("fhe-counter")
    generator.generate("fhe-add")
    assert summary.read_bytes() == first, "expected no change on re-runs"
    assert summary.read_text(encoding="utf-8").count("(basic.md)") == 1


def test_all_entries_and_skips(catalog: Catalog, hub_root: Path) -> None:
    result = DocsGenerator(catalog).generate()
    assert [path.name for path in result.pages] == ["basic.md", "voting.md"]
    skipped = {path.name for path in result.skipped}
    assert "PlainStore.sol" in skipped
    assert "FHECounter.test.ts" in skipped
    summary = (hub_root / "docs" / "SUMMARY.md").read_text(encoding="utf-8")
    assert summary.index("## Basic Examples") < summary.index("## Voting")
    assert "* [Voting](voting.md)" in summary


def test_entry_without_marker_writes_nothing(catalog: Catalog, hub_root: Path) -> None:
    result = DocsGenerator(catalog).generate("plain-store")
    assert result.pages == []
    assert result.index is None
    assert len(result.skipped) == 2
    assert not (hub_root / "docs").exists()


def test_no_index_skips_merge(
    catalog: Catalog, hub_root: Path, mocker: MockerFixture
) -> None:
    merge = mocker.spy(TocIndex, "merge")
    result = DocsGenerator(catalog).generate(update_index=False)
    assert merge.call_count == 0
    assert result.index is None
    assert (hub_root / "docs" / "basic.md").is_file()
    assert not (hub_root / "docs" / "SUMMARY.md").exists()


def test_parallel_extraction_matches_serial(catalog: Catalog, hub_root: Path) -> None:
    DocsGenerator(catalog).generate(update_index=False)
    serial = (hub_root / "docs" / "basic.md").read_text(encoding="utf-8")
    DocsGenerator(catalog).generate(update_index=False, jobs=4)
    parallel = (hub_root / "docs" / "basic.md").read_text(encoding="utf-8")
    assert parallel == serial


def test_html_pages_highlight_examples(catalog: Catalog) -> None:
    result = DocsGenerator(catalog).generate("fhe-counter", html=True)
    assert [path.name for path in result.html_pages] == ["basic.html"]
    soup = BeautifulSoup(result.html_pages[0].read_text(encoding="utf-8"), "html.parser")
    assert soup.title is not None
    assert soup.title.get_text() == "Basic Examples"
    blocks = soup.select("div.codehilite")
    assert blocks, "expected highlighted code blocks"
    assert blocks[0].get("data-language") == "solidity"
    assert "fhecounter.store" in blocks[0].get_text()


def test_unknown_entry(catalog: Catalog) -> None:
    with pytest.raises(UnknownEntryError):
        DocsGenerator(catalog).generate("does-not-exist")


def test_missing_source(catalog: Catalog) -> None:
    catalog.resolve(catalog.lookup("fhe-counter").impl_path).unlink()
    with pytest.raises(SourceMissingError):
        DocsGenerator(catalog).generate("fhe-counter")


def test_single_entry_ignores_other_missing_sources(
    catalog: Catalog, hub_root: Path
) -> None:
    catalog.resolve(catalog.lookup("encrypted-vote").test_path).unlink()
    result = DocsGenerator(catalog).generate("fhe-counter")
    assert [path.name for path in result.pages] == ["basic.md"]
    page = (hub_root / "docs" / "basic.md").read_text(encoding="utf-8")
    assert "## FHEAdd" in page


def test_full_run_still_requires_every_source(catalog: Catalog) -> None:
    catalog.resolve(catalog.lookup("encrypted-vote").test_path).unlink()
    with pytest.raises(SourceMissingError) as excinfo:
        DocsGenerator(catalog).generate()
    assert excinfo.value.path.name == "EncryptedVote.test.ts"


def test_pages_list_full_sources(catalog: Catalog, hub_root: Path) -> None:
    DocsGenerator(catalog).generate("fhe-counter")
    page = (hub_root / "docs" / "basic.md").read_text(encoding="utf-8")

    contract = catalog.resolve(catalog.lookup("fhe-counter").impl_path)
    test = catalog.resolve(catalog.lookup("fhe-counter").test_path)
    assert "**FHECounter.sol** (place in `contracts/`)" in page
    assert "**FHECounter.test.ts** (place in `test/`)" in page
    contract_text = contract.read_text(encoding="utf-8").rstrip("\n")
    assert f"````solidity\n{contract_text}\n````" in page, (
        "expected the contract listed verbatim inside a longer fence"
    )
    test_text = test.read_text(encoding="utf-8").rstrip("\n")
    assert f"```typescript\n{test_text}\n```" in page
    assert page.index("fhecounter.store(input, proof);") < page.index("**FHECounter.sol**")
    assert page.index("## FHEAdd") < page.index("## Usage")
    assert "### Deploy\n\n```bash\nnpx hardhat deploy --network localhost\n```\n" in page
    assert page.endswith("```\n")


def test_html_page_highlights_listings(catalog: Catalog) -> None:
    result = DocsGenerator(catalog).generate("fhe-counter", html=True)
    soup = BeautifulSoup(result.html_pages[0].read_text(encoding="utf-8"), "html.parser")
    languages = [block.get("data-language") for block in soup.select("div.codehilite")]
    assert "typescript" in languages
    assert "bash" in languages


def test_fence_languages_respects_longer_fences() -> None:
    text = (
        "````solidity\n"
        "/**\n"
        "```solidity\n"
        "inner();\n"
        "```\n"
        "*/\n"
        "````\n"
        "\n"
        "```\n"
        "plain\n"
        "```\n"
    )
    assert fence_languages(text) == ["solidity", "text"]
