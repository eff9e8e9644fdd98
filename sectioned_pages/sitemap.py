"""Emit ``sitemap.xml`` for every page of a build.

Each page contributes one ``<url>`` entry whose change frequency and priority
depend on its provenance: authored content changes monthly, while generated
Section and Category index pages change whenever any child page does.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config.models import DEFAULT_TEMPLATE_NAME, PACKAGE_TEMPLATES
from .models import PageKind

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import Page

SITEMAP_FILENAME = "sitemap.xml"
CHANGE_POLICY: dict[PageKind, tuple[str, str]] = {
    PageKind.CONTENT: ("monthly", "0.5"),
    PageKind.CATEGORY: ("weekly", "0.8"),
    PageKind.SECTION: ("weekly", "1.0"),
}


@dc.dataclass(slots=True, frozen=True)
class SitemapEntry:
    """One ``<url>`` element of the sitemap."""

    location: str
    change_frequency: str
    priority: str


def sitemap_entries(pages: cabc.Iterable[Page]) -> list[SitemapEntry]:
    """Return sitemap entries for ``pages`` in the order given."""
    entries: list[SitemapEntry] = []
    for page in pages:
        change_frequency, priority = CHANGE_POLICY[page.kind]
        entries.append(
            SitemapEntry(
                location=page.canonical_url,
                change_frequency=change_frequency,
                priority=priority,
            )
        )
    return entries


class SitemapBuilder:
    """Render the sitemap document from the final page list."""

    def __init__(self, output_root: Path, *, templates_dir: Path | None = None) -> None:
        self.output_root = output_root
        self.templates_dir = templates_dir or PACKAGE_TEMPLATES / DEFAULT_TEMPLATE_NAME
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("sitemap.xml.jinja")

    def run(self, pages: cabc.Iterable[Page]) -> Path:
        """Write ``sitemap.xml`` at the output root and return its path."""
        output_path = self.output_root / SITEMAP_FILENAME
        output_path.parent.mkdir(parents=True, exist_ok=True)
        xml = self.template.render(entries=sitemap_entries(pages))
        if not xml.endswith("\n"):
            xml += "\n"
        output_path.write_text(xml, encoding="utf-8")
        return output_path


__all__ = [
    "CHANGE_POLICY",
    "SITEMAP_FILENAME",
    "SitemapBuilder",
    "SitemapEntry",
    "sitemap_entries",
]
