"""Aggregate Sections, Categories and Pages into navigation markup.

:class:`NavigationBuilder` runs once per build, after every content page is
known. It walks Sections × Categories × Pages in the order given and produces
three markups in the same pass: the global menu, the body of each Category
index page and the body of each Section index page. The two index bodies become
synthetic :class:`~sectioned_pages.models.Page` records that the
generator renders like any other page.

Ordering is whatever the caller passes in. Sorting Sections by their numeric
index is the caller's decision (see
:meth:`~sectioned_pages.site_model.SiteModel.ordered_sections`).
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from html import escape
from pathlib import Path

from ._constants import HOME_LABEL
from .models import Breadcrumb, Page, PageKind
from .rewriter import canonical_url

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .classifier import Category, Section
    from .config import SiteConfig

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class SectionLink:
    """Link to a Section index page, listed in the site footer."""

    title: str
    url: str


@dc.dataclass(slots=True)
class NavigationResult:
    """Serialized navigation tree plus the synthetic pages it implies."""

    menu_html: str
    pages: list[Page]
    orphans: list[Category]
    section_links: list[SectionLink] = dc.field(default_factory=list)


def _link(href: str, label: str) -> str:
    return f'<a href="{escape(href, quote=True)}">{escape(label)}</a>'


def _belongs_to(page: Page, category: Category) -> bool:
    return (
        page.category_slug == category.slug
        and page.category_parent == category.parent_slug
        and page.section_slug == category.section_slug
    )


class NavigationBuilder:
    """Build the global menu and synthetic index pages for one site."""

    def __init__(self, site: SiteConfig, output_root: Path) -> None:
        self.site = site
        self.output_root = output_root

    def section_path(self, section_slug: str) -> Path:
        """Return the output path of the index page for ``section_slug``."""
        return self.output_root / section_slug / self.site.index_document

    def category_path(self, category: Category) -> Path:
        """Return the output path of the index page for ``category``."""
        return self.output_root.joinpath(
            *category.url_path.split("/"), self.site.index_document
        )

    def url_for(self, output_path: Path) -> str:
        """Return the canonical URL for an output path of this site."""
        return canonical_url(
            self.site.base_url,
            output_path,
            self.output_root,
            index_document=self.site.index_document,
        )

    def build(
        self,
        sections: cabc.Sequence[Section],
        categories: cabc.Sequence[Category],
        pages: cabc.Sequence[Page],
    ) -> NavigationResult:
        """Return the menu markup and synthetic pages for the given site.

        Parameters
        ----------
        sections : Sequence[Section]
            Sections in the order they should appear; empty slugs are skipped.
        categories : Sequence[Category]
            Categories in the order they should appear within each Section.
        pages : Sequence[Page]
            Content pages in discovery order.

        Returns
        -------
        NavigationResult
            Menu markup, synthetic Section pages (one per non-empty Section)
            followed by synthetic Category pages, and the orphan Categories
            that could not be placed.
        """
        content_pages = [page for page in pages if not page.is_synthetic]
        menu: list[str] = []
        section_pages: list[Page] = []
        category_pages: list[Page] = []
        section_links: list[SectionLink] = []
        placed: set[Category] = set()

        for section in sections:
            if section.is_empty:
                continue
            section_url = self.url_for(self.section_path(section.slug))
            section_links.append(SectionLink(title=section.title, url=section_url))
            section_body = ["<ul>\n"]
            menu.append(f"<li>\n{_link(section_url, section.title)}\n<ul>\n")
            for category in categories:
                if category.is_empty or category.section_slug != section.slug:
                    continue
                placed.add(category)
                category_path = self.category_path(category)
                category_url = self.url_for(category_path)
                category_body = ["<ul>\n"]
                menu.append(f"<li>{_link(category_url, category.title)}\n<ul>\n")
                heading = f"<strong>{_link(category_url, category.title)}</strong>"
                section_body.append(f"<li>{heading}\n<ul>\n")
                for page in content_pages:
                    if not _belongs_to(page, category):
                        continue
                    item = f"<li>{_link(page.canonical_url, page.title)}</li>\n"
                    menu.append(item)
                    category_body.append(item)
                    section_body.append(item)
                category_body.append("</ul>\n")
                section_body.append("</ul>\n</li>\n")
                menu.append("</ul>\n</li>\n")
                category_pages.append(
                    self._category_page(
                        section, category, category_path, category_url, category_body
                    )
                )
            section_body.append("</ul>\n")
            menu.append("</ul>\n</li>\n")
            section_pages.append(self._section_page(section, section_url, section_body))

        orphans = [
            category
            for category in categories
            if not category.is_empty and category not in placed
        ]
        for orphan in orphans:
            logger.warning(
                "Category '%s' has no section; its pages are left out of navigation",
                orphan.url_path or orphan.slug,
            )
        return NavigationResult(
            menu_html="".join(menu),
            pages=section_pages + category_pages,
            orphans=orphans,
            section_links=section_links,
        )

    def _home(self) -> Breadcrumb:
        return Breadcrumb(label=HOME_LABEL, href=self.site.base_url)

    def _section_page(self, section: Section, url: str, body: list[str]) -> Page:
        return Page(
            title=section.title,
            body="".join(body),
            output_path=self.section_path(section.slug),
            canonical_url=url,
            section_slug=section.slug,
            section_title=section.title,
            nav_index=section.index,
            kind=PageKind.SECTION,
            og_image=self.site.og_image,
            og_type=self.site.og_type,
            breadcrumbs=[self._home(), Breadcrumb(label=section.title)],
        )

    def _category_page(
        self,
        section: Section,
        category: Category,
        output_path: Path,
        url: str,
        body: list[str],
    ) -> Page:
        return Page(
            title=category.title,
            body="".join(body),
            output_path=output_path,
            canonical_url=url,
            section_slug=section.slug,
            section_title=section.title,
            category_slug=category.slug,
            category_title=category.title,
            category_parent=category.parent_slug,
            nav_index=section.index,
            kind=PageKind.CATEGORY,
            og_image=self.site.og_image,
            og_type=self.site.og_type,
            breadcrumbs=[
                self._home(),
                Breadcrumb(
                    label=section.title,
                    href=self.url_for(self.section_path(section.slug)),
                ),
                Breadcrumb(label=category.title),
            ],
        )


__all__ = ["NavigationBuilder", "NavigationResult", "SectionLink"]
