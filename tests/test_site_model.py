"""Unit tests for the in-memory site registry."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

import pytest

from sectioned_pages.classifier import Section, classify
from sectioned_pages.models import Page, PageKind
from sectioned_pages.site_model import OutputCollisionError, SiteModel


def _page(output: str, source: str | None = None, **overrides: object) -> Page:
    return Page(
        title=overrides.pop("title", "Page"),  # type: ignore[arg-type]
        body="",
        output_path=Path(output),
        canonical_url=f"https://example.com/{output}",
        source_path=Path(source) if source else None,
        **overrides,  # type: ignore[arg-type]
    )


def test_sections_and_categories_are_deduplicated() -> None:
    """Repeated Sections and Categories are registered once."""
    model = SiteModel()
    first = classify(PurePosixPath("1_blog/_notes/a.md"))
    second = classify(PurePosixPath("1_blog/_notes/b.md"))
    model.add_content(_page("out/blog/notes/a.html", "a.md"), first)
    model.add_content(_page("out/blog/notes/b.html", "b.md"), second)

    assert [section.slug for section in model.sections] == ["blog"]
    assert [category.slug for category in model.categories] == ["notes"]
    assert len(model.content_pages) == 2


def test_same_category_slug_in_two_sections_is_kept_apart() -> None:
    """Categories are keyed by slug, parent and Section."""
    model = SiteModel()
    model.add_content(
        _page("out/blog/notes/a.html"), classify(PurePosixPath("1_blog/_notes/a.md"))
    )
    model.add_content(
        _page("out/work/notes/a.html"), classify(PurePosixPath("2_work/_notes/a.md"))
    )

    assert [c.section_slug for c in model.categories] == ["blog", "work"]


def test_output_collision_is_rejected() -> None:
    """Two sources writing the same output path abort the build."""
    model = SiteModel()
    classification = classify(PurePosixPath("1_blog/post.md"))
    model.add_content(_page("out/blog/post.html", "1_blog/post.md"), classification)

    with pytest.raises(OutputCollisionError, match="1_blog/post.md"):
        model.add_content(
            _page("out/blog/post.html", "01_blog/post.md"),
            classify(PurePosixPath("01_blog/post.md")),
        )


def test_authored_page_shadows_synthetic_index(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A hand-written index page wins over the generated one."""
    model = SiteModel()
    model.add_content(
        _page("out/blog/index.html", "1_blog/index.md"),
        classify(PurePosixPath("1_blog/index.md")),
    )
    synthetic = _page("out/blog/index.html", kind=PageKind.SECTION)

    with caplog.at_level(logging.WARNING, logger="sectioned_pages.site_model"):
        added = model.add_synthetic(synthetic)

    assert added is False
    assert model.pages[0].source_path == Path("1_blog/index.md")
    assert len(model.pages) == 1
    assert "Keeping authored page" in caplog.text


def test_synthetic_pages_are_not_content() -> None:
    """Synthetic pages are excluded from ``content_pages``."""
    model = SiteModel()
    assert model.add_synthetic(_page("out/blog/index.html", kind=PageKind.SECTION))

    assert model.content_pages == []
    assert model.pages[0].is_synthetic


def test_conflicting_section_index_keeps_first(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A slug declared with two indexes keeps the first and warns."""
    model = SiteModel()
    model.add_section(Section(index=1, title="Blog", slug="blog"))

    with caplog.at_level(logging.WARNING, logger="sectioned_pages.site_model"):
        model.add_section(Section(index=3, title="Blog", slug="blog"))

    assert [section.index for section in model.sections] == [1]
    assert "declared with indexes 1 and 3" in caplog.text


def test_ordered_sections_sort_is_stable() -> None:
    """Sorting by index preserves discovery order for equal indexes."""
    model = SiteModel()
    for index, slug in [(2, "b"), (1, "a"), (2, "c"), (0, "z")]:
        model.add_section(Section(index=index, title=slug, slug=slug))

    assert [s.slug for s in model.ordered_sections(sort=True)] == ["z", "a", "b", "c"]
    assert [s.slug for s in model.ordered_sections(sort=False)] == ["b", "a", "c", "z"]


def test_orphan_categories() -> None:
    """Categories with no Section are reported as orphans."""
    model = SiteModel()
    model.add_content(
        _page("out/drafts/x.html"), classify(PurePosixPath("_drafts/x.md"))
    )
    model.add_content(
        _page("out/blog/notes/y.html"), classify(PurePosixPath("1_blog/_notes/y.md"))
    )

    assert [c.slug for c in model.orphan_categories()] == ["drafts"]


def test_claimed_paths_collide_with_pages() -> None:
    """Copied files and rendered pages share one ownership map."""
    model = SiteModel()
    model.claim(Path("out/blog/post.html"), "'content/1_blog/post.html'")

    with pytest.raises(OutputCollisionError, match="content/1_blog/post.html"):
        model.add_content(
            _page("out/blog/post.html", "content/1_blog/post.md"),
            classify(PurePosixPath("1_blog/post.md")),
        )


def test_claim_rejects_second_owner() -> None:
    """A path can only be claimed once."""
    model = SiteModel()
    model.claim(Path("out/blog/a.txt"), "'content/1_blog/a.txt'")

    with pytest.raises(OutputCollisionError, match="content/blog/a.txt"):
        model.claim(Path("out/blog/a.txt"), "'content/blog/a.txt'")


def test_claimed_static_index_shadows_synthetic_page() -> None:
    """A copied index document also wins over the generated one."""
    model = SiteModel()
    model.claim(Path("out/blog/index.html"), "'content/1_blog/index.html'")

    assert not model.add_synthetic(_page("out/blog/index.html", kind=PageKind.SECTION))
    assert model.pages == []
