"""Page records shared by navigation, sitemap and the generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum
from pathlib import Path


class PageKind(enum.StrEnum):
    """Provenance of a page."""

    CONTENT = "content"
    CATEGORY = "category"
    SECTION = "section"


@dc.dataclass(slots=True, frozen=True)
class Breadcrumb:
    """One link in a page's ``Home // Section // Category`` trail."""

    label: str
    href: str = ""


@dc.dataclass(slots=True)
class Page:
    """One unit of output passed to the document assembler.

    Attributes
    ----------
    title : str
        Page title from front matter or the output file stem.
    body : str
        Rendered HTML fragment.
    output_path : Path
        Absolute or project-relative destination of the document.
    canonical_url : str
        Public URL of the document.
    section_slug, section_title : str
        Owning Section; empty for unsectioned pages.
    category_slug, category_title, category_parent : str
        Owning Category; empty for uncategorized pages.
    nav_index : int
        Numeric index inherited from the Section.
    kind : PageKind
        Whether the page came from a source file or was synthesized.
    description, intro, tags, date, og_image, og_type : str
        Presentation metadata passed through from front matter.
    breadcrumbs : list[Breadcrumb]
        Trail rendered above the page body.
    source_path : Path | None
        Source file for content pages; ``None`` for synthetic pages.
    """

    title: str
    body: str
    output_path: Path
    canonical_url: str
    section_slug: str = ""
    section_title: str = ""
    category_slug: str = ""
    category_title: str = ""
    category_parent: str = ""
    nav_index: int = 0
    kind: PageKind = PageKind.CONTENT
    description: str = ""
    intro: str = ""
    tags: str = ""
    date: str = ""
    og_image: str = ""
    og_type: str = ""
    breadcrumbs: list[Breadcrumb] = dc.field(default_factory=list)
    source_path: Path | None = None

    @property
    def is_synthetic(self) -> bool:
        """Return ``True`` for generated Section and Category index pages."""
        return self.kind is not PageKind.CONTENT

    @property
    def tag_list(self) -> list[str]:
        """Split the comma-separated ``tags`` field into trimmed labels."""
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]


@dc.dataclass(slots=True, frozen=True)
class RenderedDocument:
    """Output of the Markdown renderer for a single source file."""

    body: str
    front_matter: dict[str, str | None]


__all__ = ["Breadcrumb", "Page", "PageKind", "RenderedDocument"]
