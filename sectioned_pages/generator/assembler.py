"""Assemble final HTML documents from pages, navigation and layout templates."""

from __future__ import annotations

import datetime as dt
import typing as typ

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sectioned_pages.config.models import DEFAULT_TEMPLATE_NAME, PACKAGE_TEMPLATES
from sectioned_pages.toc import build_toc, extract_headings

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from sectioned_pages.config import SiteConfig
    from sectioned_pages.models import Page
    from sectioned_pages.navigation import SectionLink

PAGE_TEMPLATE = "page.jinja"


class DocumentAssembler:
    """Render :class:`Page` records through the site's Jinja layout."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        templates_dir: Path | None = None,
        pygments_css: str = "",
    ) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        site : SiteConfig
            Site-wide metadata exposed to every template as ``site``.
        templates_dir : Path, optional
            Theme directory searched before the packaged default templates, so
            a theme may override ``page.jinja`` alone.
        pygments_css : str, optional
            Stylesheet for highlighted code blocks.
        """
        self.site = site
        search_path = [PACKAGE_TEMPLATES / DEFAULT_TEMPLATE_NAME]
        if templates_dir is not None and templates_dir not in search_path:
            search_path.insert(0, templates_dir)
        self.env = Environment(
            loader=FileSystemLoader([str(path) for path in search_path]),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(PAGE_TEMPLATE)
        self.pygments_css = pygments_css

    def render(
        self,
        page: Page,
        *,
        navigation_html: str,
        section_links: cabc.Sequence[SectionLink],
        generated_at: dt.datetime | None = None,
    ) -> str:
        """Return the complete HTML document for ``page``."""
        toc_html = build_toc(extract_headings(page.body))
        context = {
            "page": page,
            "body": page.body,
            "toc": toc_html,
            "navigation": navigation_html,
            "analytics": self.site.analytics,
            "section_links": section_links,
            "site": self.site,
            "pygments_css": self.pygments_css,
            "generated_at": generated_at or dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def write(
        self,
        page: Page,
        *,
        navigation_html: str,
        section_links: cabc.Sequence[SectionLink],
        generated_at: dt.datetime | None = None,
    ) -> Path:
        """Render ``page`` and write it to ``page.output_path``."""
        html = self.render(
            page,
            navigation_html=navigation_html,
            section_links=section_links,
            generated_at=generated_at,
        )
        page.output_path.parent.mkdir(parents=True, exist_ok=True)
        page.output_path.write_text(html, encoding="utf-8")
        return page.output_path


__all__ = ["PAGE_TEMPLATE", "DocumentAssembler"]
