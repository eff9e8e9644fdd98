r"""Infer Section and Category descriptors from content directory names.

Content is grouped by directory naming conventions rather than front matter:

* A directory named ``<digits>_<name>`` (for example ``1_blog``) is a
  *Section*, a top-level navigation bucket ordered by its numeric prefix.
* A directory named ``_<name>`` (for example ``_notes``) is a *Category*, a
  second-level bucket nested under the Section found on the same path. When two
  such directories appear, the first is the parent Category of the second.

Only directory segments carry markers; the file name never does. Classification
never raises: anything that does not match degrades to the empty descriptor.

Example
-------
>>> from pathlib import PurePosixPath
>>> from sectioned_pages.classifier import classify
>>> result = classify(PurePosixPath("1_blog/_notes/post.md"))
>>> (result.section.index, result.section.slug, result.category.slug)
(1, 'blog', 'notes')
"""

from __future__ import annotations

import dataclasses as dc
import re
from pathlib import PurePath

SECTION_PATTERN = re.compile(r"^([0-9]{1,5})_(.+)$")
CATEGORY_PATTERN = re.compile(r"^_(.+)$")


@dc.dataclass(slots=True, frozen=True)
class Section:
    """Top-level navigation bucket.

    Attributes
    ----------
    index : int
        Numeric prefix of the directory, used as the sort key; ``0`` when the
        path is unsectioned.
    title : str
        Human-readable label derived from the slug.
    slug : str
        Directory name without its numeric marker, used verbatim in URLs.
    """

    index: int = 0
    title: str = ""
    slug: str = ""

    @property
    def is_empty(self) -> bool:
        """Return ``True`` for the unsectioned zero value."""
        return not self.slug


@dc.dataclass(slots=True, frozen=True)
class Category:
    """Second-level navigation bucket.

    Attributes
    ----------
    title : str
        Human-readable label derived from the slug.
    slug : str
        Directory name without its leading underscore.
    parent_slug : str
        Slug of the enclosing Category for nested categories, else empty.
    section_slug : str
        Slug of the Section owning this Category, else empty (an orphan).
    """

    title: str = ""
    slug: str = ""
    parent_slug: str = ""
    section_slug: str = ""

    @property
    def is_empty(self) -> bool:
        """Return ``True`` for uncategorized pages."""
        return not self.slug

    @property
    def url_path(self) -> str:
        """Return the marker-free ``section/[parent/]slug`` path of the category."""
        segments = [self.section_slug, self.parent_slug, self.slug]
        return "/".join(segment for segment in segments if segment)


@dc.dataclass(slots=True, frozen=True)
class Classification:
    """Section and Category inferred for one path, plus the segments to strip."""

    section: Section
    category: Category
    section_segment: int | None = None
    category_segments: tuple[int, ...] = ()


def display_title(slug: str) -> str:
    """Return a title-cased label with hyphens turned into spaces.

    Only the first letter of each space-separated word is raised, so
    ``writer's-notes`` becomes ``Writer's Notes``.
    """
    words = slug.replace("-", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def _directory_segments(path: PurePath) -> tuple[str, ...]:
    return path.parts[:-1]


def _match_section(segments: tuple[str, ...]) -> tuple[Section, int | None]:
    for position, segment in enumerate(segments):
        match = SECTION_PATTERN.match(segment)
        if match is None:
            continue
        try:
            index = int(match.group(1))
        except ValueError:
            index = 0
        slug = match.group(2)
        return Section(index=index, title=display_title(slug), slug=slug), position
    return Section(), None


def _match_categories(segments: tuple[str, ...]) -> list[tuple[int, str]]:
    matches: list[tuple[int, str]] = []
    for position, segment in enumerate(segments):
        match = CATEGORY_PATTERN.match(segment)
        if match is not None:
            matches.append((position, match.group(1)))
    return matches


def classify_section(path: PurePath) -> Section:
    """Return the Section named by the first ``<digits>_<name>`` directory."""
    section, _position = _match_section(_directory_segments(path))
    return section


def classify_category(path: PurePath) -> Category:
    """Return the Category named by the ``_<name>`` directories on ``path``.

    One match is the Category itself; two matches are parent and child. Zero or
    more than two matches produce an empty Category.
    """
    return classify(path).category


def classify(path: PurePath) -> Classification:
    """Classify ``path`` (relative to the content root) in a single pass."""
    segments = _directory_segments(path)
    section, section_position = _match_section(segments)
    matches = _match_categories(segments)

    parent_slug = ""
    match len(matches):
        case 1:
            slug = matches[0][1]
        case 2:
            parent_slug = matches[0][1]
            slug = matches[1][1]
        case _:
            # The first marker is still stripped from the output path.
            return Classification(
                section=section,
                category=Category(),
                section_segment=section_position,
                category_segments=tuple(position for position, _slug in matches[:1]),
            )

    category = Category(
        title=display_title(slug),
        slug=slug,
        parent_slug=parent_slug,
        section_slug=section.slug,
    )
    return Classification(
        section=section,
        category=category,
        section_segment=section_position,
        category_segments=tuple(position for position, _slug in matches),
    )


__all__ = [
    "CATEGORY_PATTERN",
    "SECTION_PATTERN",
    "Category",
    "Classification",
    "Section",
    "classify",
    "classify_category",
    "classify_section",
    "display_title",
]
