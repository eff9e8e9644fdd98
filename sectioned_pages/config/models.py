"""Typed dataclasses describing sectioned_pages site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from sectioned_pages._constants import ASSETS_DIRNAME, CONFIG_DIRNAME

DEFAULT_TEMPLATE_NAME = "default"
PACKAGE_TEMPLATES = Path(__file__).resolve().parents[1] / "templates"


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Site-wide metadata threaded through rewriting, navigation and assembly.

    Attributes
    ----------
    title : str
        Site title rendered in the document head and breadcrumbs.
    base_url : str
        Public base URL without a trailing slash.
    domain : str
        Bare domain name, used for display only.
    email, github, linkedin, twitter : str
        Contact and social handles exposed to templates.
    template_name : str
        Template selector under ``<project>/templates``.
    analytics : str
        Raw analytics snippet injected into every document.
    og_type, og_image : str
        Default social-card fields for pages without front matter overrides.
    favicon : str
        Favicon path relative to the base URL.
    pygments_style : str
        Pygments style used for highlighted code blocks.
    sort_navigation : bool
        Sort sections by their numeric index before building navigation.
    index_document : str
        Name of directory index documents (``index.html``).
    """

    title: str
    base_url: str
    domain: str = ""
    email: str = ""
    github: str = ""
    linkedin: str = ""
    twitter: str = ""
    template_name: str = DEFAULT_TEMPLATE_NAME
    analytics: str = ""
    og_type: str = "website"
    og_image: str = ""
    favicon: str = "favicon.ico"
    pygments_style: str = "monokai"
    sort_navigation: bool = True
    index_document: str = "index.html"


@dc.dataclass(slots=True, frozen=True)
class Redirect:
    """A single ``from`` → ``to`` entry of the redirect manifest."""

    source: str
    target: str


@dc.dataclass(slots=True)
class BuildPaths:
    """Filesystem roots used by one build."""

    content: Path
    output: Path
    templates: Path
    assets: Path | None = None
    source_suffix: str = ".md"
    output_suffix: str = ".html"

    @classmethod
    def for_project(
        cls,
        project_root: Path,
        site: SiteConfig,
        *,
        content: Path | None = None,
        output: Path | None = None,
    ) -> BuildPaths:
        """Resolve the conventional layout rooted at ``project_root``.

        Content lives in ``content/`` and output in the sibling ``out/``. The
        template directory is ``templates/<template_name>`` when the project
        ships one, otherwise the packaged default templates are used.
        """
        content_root = content or project_root / "content"
        output_root = output or content_root.parent / "out"
        project_templates = project_root / "templates" / site.template_name
        templates = (
            project_templates
            if project_templates.is_dir()
            else PACKAGE_TEMPLATES / DEFAULT_TEMPLATE_NAME
        )
        assets = templates / ASSETS_DIRNAME
        return cls(
            content=content_root,
            output=output_root,
            templates=templates,
            assets=assets if assets.is_dir() else None,
        )

    @property
    def config_dir(self) -> Path:
        """Return the hidden configuration directory inside the content root."""
        return self.content / CONFIG_DIRNAME


__all__ = [
    "DEFAULT_TEMPLATE_NAME",
    "PACKAGE_TEMPLATES",
    "BuildPaths",
    "Redirect",
    "SiteConfig",
    "SiteConfigError",
]
