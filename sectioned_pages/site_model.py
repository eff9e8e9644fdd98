"""In-memory registry of the Sections, Categories and Pages of one build."""

from __future__ import annotations

import logging
import typing as typ

from .classifier import Category, Classification, Section

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import Page

logger = logging.getLogger(__name__)


class OutputCollisionError(RuntimeError):
    """Raised when two source files rewrite to the same output path."""


class SiteModel:
    """Collect discovered pages and de-duplicate their Sections and Categories.

    Sections, Categories and Pages are kept in discovery order. Sections are
    unique by slug and Categories by ``(slug, parent_slug, section_slug)``.
    Every written file, rendered or copied, owns a distinct output path.
    """

    def __init__(self) -> None:
        self.sections: list[Section] = []
        self.categories: list[Category] = []
        self.pages: list[Page] = []
        self._section_slugs: dict[str, Section] = {}
        self._category_keys: set[tuple[str, str, str]] = set()
        self._owners: dict[Path, str] = {}

    def add_content(self, page: Page, classification: Classification) -> None:
        """Register a content page along with its Section and Category.

        Raises
        ------
        OutputCollisionError
            If anything else already writes to ``page.output_path``.
        """
        self.claim(page.output_path, f"'{page.source_path}'")
        self.pages.append(page)
        self.add_section(classification.section)
        self.add_category(classification.category)

    def claim(self, output_path: Path, owner: str) -> None:
        """Reserve ``output_path`` for ``owner``.

        Copied static files, redirect stubs and the sitemap share this map with
        rendered pages.

        Raises
        ------
        OutputCollisionError
            If ``output_path`` is already claimed.
        """
        existing = self._owners.get(output_path)
        if existing is not None:
            msg = (
                f"Output path '{output_path}' is produced by both "
                f"{existing} and {owner}."
            )
            raise OutputCollisionError(msg)
        self._owners[output_path] = owner

    def add_synthetic(self, page: Page) -> bool:
        """Register a synthetic index page unless an authored page owns its path.

        Returns
        -------
        bool
            ``True`` when the page was added.
        """
        existing = self._owners.get(page.output_path)
        if existing is not None:
            logger.warning(
                "Keeping authored page %s instead of generated %s index at %s",
                existing,
                page.kind,
                page.output_path,
            )
            return False
        self._owners[page.output_path] = f"generated {page.kind} index"
        self.pages.append(page)
        return True

    def add_section(self, section: Section) -> None:
        """Append ``section`` unless its slug is already known."""
        known = self._section_slugs.get(section.slug)
        if known is None:
            self._section_slugs[section.slug] = section
            self.sections.append(section)
        elif known.index != section.index:
            logger.warning(
                "Section '%s' declared with indexes %d and %d; keeping %d",
                section.slug,
                known.index,
                section.index,
                known.index,
            )

    def add_category(self, category: Category) -> None:
        """Append ``category`` unless the same Category was already seen."""
        key = (category.slug, category.parent_slug, category.section_slug)
        if key in self._category_keys:
            return
        self._category_keys.add(key)
        self.categories.append(category)

    @property
    def content_pages(self) -> list[Page]:
        """Return content pages in discovery order."""
        return [page for page in self.pages if not page.is_synthetic]

    def ordered_sections(self, *, sort: bool) -> list[Section]:
        """Return Sections in discovery order or stably sorted by ``index``."""
        if not sort:
            return list(self.sections)
        return sorted(self.sections, key=lambda section: section.index)

    def orphan_categories(self) -> list[Category]:
        """Return non-empty Categories whose Section is unknown or empty."""
        known = {slug for slug in self._section_slugs if slug}
        return [
            category
            for category in self.categories
            if not category.is_empty and category.section_slug not in known
        ]


__all__ = ["OutputCollisionError", "SiteModel"]
