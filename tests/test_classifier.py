"""Unit tests for Section and Category classification of content paths.

The classifier only inspects directory segments: ``<digits>_<name>`` marks a
Section and ``_<name>`` marks a Category. These tests pin the edge cases of
both patterns, including the degenerate inputs that must fall back to empty
descriptors instead of raising.
"""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from sectioned_pages.classifier import (
    Category,
    Section,
    classify,
    classify_category,
    classify_section,
    display_title,
)


@pytest.mark.parametrize(
    ("source", "index", "slug"),
    [
        ("1_blog/post.md", 1, "blog"),
        ("0_home/post.md", 0, "home"),
        ("12345_archive/post.md", 12345, "archive"),
        ("007_agents/deep/nested/post.md", 7, "agents"),
    ],
)
def test_section_index_and_slug(source: str, index: int, slug: str) -> None:
    """Numeric prefixes of up to five digits name the Section."""
    section = classify_section(PurePosixPath(source))

    assert section.index == index
    assert section.slug == slug


@pytest.mark.parametrize(
    "source",
    [
        "post.md",
        "blog/post.md",
        "123456_toolong/post.md",
        "_blog/post.md",
        "x1_blog/post.md",
        "1_blog.md",
    ],
)
def test_unsectioned_paths_yield_empty_section(source: str) -> None:
    """Paths without a well-formed Section directory map to the zero value."""
    section = classify_section(PurePosixPath(source))

    assert section == Section()
    assert section.is_empty


def test_first_section_segment_wins() -> None:
    """Only the first matching directory names the Section."""
    section = classify_section(PurePosixPath("2_docs/3_guides/page.md"))

    assert (section.index, section.slug) == (2, "docs")


def test_section_title_is_derived_from_slug() -> None:
    """Hyphens become spaces and words are title-cased."""
    section = classify_section(PurePosixPath("4_open-source/page.md"))

    assert section.title == "Open Source"
    assert section.slug == "open-source"


def test_single_category_has_no_parent() -> None:
    """One ``_name`` directory is the Category itself."""
    result = classify(PurePosixPath("1_blog/_notes/post.md"))

    assert result.category == Category(
        title="Notes", slug="notes", parent_slug="", section_slug="blog"
    )
    assert result.section.slug == "blog"


def test_single_category_below_plain_directories() -> None:
    """Unmarked directories between Section and Category are ignored."""
    category = classify_category(PurePosixPath("1_blog/some/dir/_cat/file.md"))

    assert category.slug == "cat"
    assert category.parent_slug == ""


def test_two_categories_form_parent_and_child() -> None:
    """The first of two ``_name`` directories is the parent Category."""
    category = classify_category(PurePosixPath("1_work/_clients/_acme/file.md"))

    assert category.slug == "acme"
    assert category.parent_slug == "clients"
    assert category.section_slug == "work"
    assert category.url_path == "work/clients/acme"


def test_three_categories_degrade_to_empty() -> None:
    """More than two Category directories are not a valid nesting."""
    category = classify_category(PurePosixPath("1_a/_b/_c/_d/file.md"))

    assert category == Category()
    assert category.is_empty


def test_category_without_section_is_unowned() -> None:
    """A Category outside any Section keeps an empty ``section_slug``."""
    category = classify_category(PurePosixPath("_drafts/post.md"))

    assert category.slug == "drafts"
    assert category.section_slug == ""


def test_file_name_never_carries_markers() -> None:
    """Underscore-prefixed file names are not Categories."""
    result = classify(PurePosixPath("1_blog/_draft.md"))

    assert result.category.is_empty
    assert result.category_segments == ()


def test_lone_underscore_directory_is_not_a_category() -> None:
    """``_`` alone has no name to extract."""
    category = classify_category(PurePosixPath("1_blog/_/post.md"))

    assert category.is_empty


def test_classification_records_matched_segments() -> None:
    """Segment positions identify which directories carry markers."""
    result = classify(PurePosixPath("1_work/misc/_clients/_acme/file.md"))

    assert result.section_segment == 0
    assert result.category_segments == (2, 3)


def test_display_title() -> None:
    """Display titles are derived purely from the slug."""
    assert display_title("machine-learning") == "Machine Learning"
    assert display_title("notes") == "Notes"


@pytest.mark.parametrize(
    ("slug", "title"),
    [
        ("writer's-notes", "Writer's Notes"),
        ("rock-n-roll", "Rock N Roll"),
        ("COVID-19", "Covid 19"),
        ("it's-a-3d-world", "It's A 3d World"),
    ],
)
def test_display_title_capitalises_words_only(slug: str, title: str) -> None:
    """Letters after apostrophes or digits stay lower-case."""
    assert display_title(slug) == title


def test_degraded_category_still_records_first_marker() -> None:
    """Three Category directories yield no Category but keep the first marker."""
    result = classify(PurePosixPath("1_a/_b/_c/_d/x.md"))

    assert result.category.is_empty
    assert result.category_segments == (1,)
