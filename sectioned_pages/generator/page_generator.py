"""High-level orchestration for a full site build.

This module walks the content tree, classifies every Markdown source by its
directory markers, renders it with :class:`HtmlContentRenderer`, and registers
the resulting pages with a :class:`~sectioned_pages.site_model.SiteModel`. Once
the walk completes, :class:`~sectioned_pages.navigation.NavigationBuilder` runs
once to produce the global menu and the synthetic Section and Category index
pages, after which every page is assembled into a themed HTML document. The
sitemap and redirect stubs are written last.

Every run regenerates the output root from scratch. Any I/O failure propagates
and aborts the build; files written before the failure are left in place.

Example
-------
>>> from pathlib import Path
>>> from sectioned_pages.config import BuildPaths, load_site_config
>>> from sectioned_pages.generator import SiteGenerator
>>> site = load_site_config(Path("content/.config/config.yaml"))  # doctest: +SKIP
>>> paths = BuildPaths.for_project(Path("."), site)  # doctest: +SKIP
>>> SiteGenerator(site, paths).run()  # doctest: +SKIP
[PosixPath('out/blog/notes/post.html'), ...]
"""

from __future__ import annotations

import datetime as dt
import logging
import shutil
import typing as typ
from pathlib import Path, PurePosixPath

from sectioned_pages._constants import CONFIG_DIRNAME, HOME_LABEL
from sectioned_pages.classifier import classify
from sectioned_pages.config.loader import REDIRECTS_FILENAME, load_redirects
from sectioned_pages.models import Breadcrumb, Page, PageKind
from sectioned_pages.navigation import NavigationBuilder, NavigationResult
from sectioned_pages.redirects import RedirectWriter, redirect_path
from sectioned_pages.rewriter import canonical_url, rewrite
from sectioned_pages.site_model import SiteModel
from sectioned_pages.sitemap import SITEMAP_FILENAME, SitemapBuilder

from .assembler import DocumentAssembler
from .renderer import HtmlContentRenderer, RenderError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sectioned_pages.classifier import Classification
    from sectioned_pages.config import BuildPaths, Redirect, SiteConfig
    from sectioned_pages.models import RenderedDocument

logger = logging.getLogger(__name__)


class SiteGenerator:
    """Compile a content tree into a themed static site."""

    def __init__(
        self,
        site: SiteConfig,
        paths: BuildPaths,
        *,
        redirects: list[Redirect] | None = None,
        renderer: HtmlContentRenderer | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        site : SiteConfig
            Site-wide metadata; threaded into rewriting, navigation and
            assembly.
        paths : BuildPaths
            Content, output, template and asset roots for this build.
        redirects : list[Redirect], optional
            Redirect manifest; when ``None`` it is read from
            ``<content>/.config/redirects.yaml`` if present.
        renderer : HtmlContentRenderer, optional
            Markdown renderer; defaults to one using ``site.pygments_style``.
        """
        self.site = site
        self.paths = paths
        self.redirects = redirects
        self.renderer = renderer or HtmlContentRenderer(site.pygments_style)
        self.navigation = NavigationBuilder(site, paths.output)
        self.assembler = DocumentAssembler(
            site,
            templates_dir=paths.templates,
            pygments_css=self.renderer.stylesheet,
        )
        self.model = SiteModel()

    def run(self) -> list[Path]:
        """Build the whole site and return every written document.

        Returns
        -------
        list[Path]
            Rendered pages (content pages, then Section and Category index
            pages), followed by the sitemap and any redirect stubs.

        Raises
        ------
        OutputCollisionError
            Raised when two sources, copied files or redirect stubs share an
            output path.
        RenderError
            Raised when a source cannot be decoded or its front matter parsed.
        OSError
            Raised on any filesystem failure.
        """
        logger.info("Building %s into %s", self.paths.content, self.paths.output)
        redirects = self._resolve_redirects()
        self._reset_output()
        self.model.claim(self.paths.output / SITEMAP_FILENAME, "the sitemap")
        self._copy_assets()
        for source in self._walk(self.paths.content):
            self._process(source)

        result = self.build_navigation()
        for page in result.pages:
            self.model.add_synthetic(page)
        self._claim_redirects(redirects)

        generated_at = dt.datetime.now(dt.UTC)
        written = [
            self.assembler.write(
                page,
                navigation_html=result.menu_html,
                section_links=result.section_links,
                generated_at=generated_at,
            )
            for page in self.model.pages
        ]
        written.append(SitemapBuilder(self.paths.output).run(self.model.pages))
        written.extend(
            RedirectWriter(
                self.paths.output,
                self.site.base_url,
                index_document=self.site.index_document,
            ).run(redirects)
        )
        return written

    def build_navigation(self) -> NavigationResult:
        """Run the navigation pass over the pages discovered so far."""
        return self.navigation.build(
            self.model.ordered_sections(sort=self.site.sort_navigation),
            self.model.categories,
            self.model.content_pages,
        )

    def _reset_output(self) -> None:
        output = self.paths.output.resolve()
        content = self.paths.content.resolve()
        if output == content or content.is_relative_to(output):
            msg = f"Output root '{output}' would overwrite the content root."
            raise ValueError(msg)
        if output.exists():
            shutil.rmtree(output)
        output.mkdir(parents=True)

    def _copy_assets(self) -> None:
        assets = self.paths.assets
        if assets is None:
            return
        target = self.paths.output / assets.name
        for asset in sorted(assets.rglob("*")):
            if asset.is_file():
                self.model.claim(
                    target / asset.relative_to(assets), f"theme asset '{asset}'"
                )
        shutil.copytree(assets, target, dirs_exist_ok=True)

    def _claim_redirects(self, redirects: cabc.Iterable[Redirect]) -> None:
        for redirect in redirects:
            self.model.claim(
                redirect_path(
                    self.paths.output, redirect.source, self.site.index_document
                ),
                f"redirect '{redirect.source}'",
            )

    def _walk(self, root: Path) -> cabc.Iterator[Path]:
        """Yield files below ``root`` in lexical, depth-first order."""
        for entry in sorted(root.iterdir(), key=lambda path: path.name):
            if entry.name == CONFIG_DIRNAME:
                continue
            if entry.is_dir():
                yield from self._walk(entry)
            elif entry.is_file():
                yield entry

    def _process(self, source: Path) -> None:
        relative = PurePosixPath(source.relative_to(self.paths.content).as_posix())
        classification = classify(relative)
        location = rewrite(
            source,
            self.paths.content,
            self.paths.output,
            source_suffix=self.paths.source_suffix,
            output_suffix=self.paths.output_suffix,
            classification=classification,
        )
        if source.suffix != self.paths.source_suffix:
            self.model.claim(location.path, f"'{source}'")
            location.path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, location.path)
            return

        logger.debug(
            "%s: section=%r category=%r -> %s",
            relative,
            classification.section.slug,
            classification.category.url_path,
            location.url_path,
        )
        try:
            rendered = self.renderer.render(
                source.read_bytes(), source_dir=relative.parent
            )
        except RenderError as exc:
            msg = f"{source}: {exc}"
            raise RenderError(msg) from exc
        page = self._build_page(source, location.path, classification, rendered)
        self.model.add_content(page, classification)

    def _build_page(
        self,
        source: Path,
        output_path: Path,
        classification: Classification,
        rendered: RenderedDocument,
    ) -> Page:
        meta = rendered.front_matter
        section = classification.section
        category = classification.category
        title = meta.get("title") or output_path.stem
        page = Page(
            title=title,
            body=rendered.body,
            output_path=output_path,
            canonical_url=canonical_url(
                self.site.base_url,
                output_path,
                self.paths.output,
                index_document=self.site.index_document,
            ),
            section_slug=section.slug,
            section_title=section.title,
            category_slug=category.slug,
            category_title=category.title,
            category_parent=category.parent_slug,
            nav_index=section.index,
            kind=PageKind.CONTENT,
            description=meta.get("description") or "",
            intro=meta.get("intro") or "",
            tags=meta.get("tags") or "",
            date=meta.get("date") or "",
            og_image=meta.get("ogimage") or self.site.og_image,
            og_type=meta.get("ogtype") or self.site.og_type,
            source_path=source,
        )
        page.breadcrumbs = self._breadcrumbs(classification, title)
        return page

    def _breadcrumbs(
        self, classification: Classification, title: str
    ) -> list[Breadcrumb]:
        section = classification.section
        if section.is_empty:
            return []
        nav = self.navigation
        crumbs = [
            Breadcrumb(label=HOME_LABEL, href=self.site.base_url),
            Breadcrumb(
                label=section.title,
                href=nav.url_for(nav.section_path(section.slug)),
            ),
        ]
        category = classification.category
        if not category.is_empty:
            crumbs.append(
                Breadcrumb(
                    label=category.title,
                    href=nav.url_for(nav.category_path(category)),
                )
            )
        crumbs.append(Breadcrumb(label=title))
        return crumbs

    def _resolve_redirects(self) -> list[Redirect]:
        if self.redirects is not None:
            return self.redirects
        return load_redirects(self.paths.config_dir / REDIRECTS_FILENAME)


__all__ = ["SiteGenerator"]
