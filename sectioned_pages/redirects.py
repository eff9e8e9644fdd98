"""Write meta-refresh redirect stubs declared in the redirect manifest."""

from __future__ import annotations

import typing as typ
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config.models import DEFAULT_TEMPLATE_NAME, PACKAGE_TEMPLATES, SiteConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import Redirect

DOCUMENT_SUFFIXES = (".html", ".htm")


def resolve_target(base_url: str, target: str) -> str:
    """Return an absolute redirect target, joining relative ones onto ``base_url``."""
    parsed = urlsplit(target)
    if parsed.scheme or parsed.netloc:
        return target
    return f"{base_url.rstrip('/')}/{target.lstrip('/')}"


def redirect_path(output_root: Path, source: str, index_document: str) -> Path:
    """Return where the redirect stub for ``source`` is written.

    Raises
    ------
    SiteConfigError
        If ``source`` is empty or climbs out of the output root.
    """
    relative = PurePosixPath(source.strip().lstrip("/"))
    if not relative.parts or ".." in relative.parts:
        msg = f"Redirect source '{source}' must be a path inside the site."
        raise SiteConfigError(msg)
    if relative.suffix.lower() not in DOCUMENT_SUFFIXES:
        relative = relative / index_document
    return output_root.joinpath(*relative.parts)


class RedirectWriter:
    """Render one minimal HTML refresh document per manifest entry."""

    def __init__(
        self,
        output_root: Path,
        base_url: str,
        *,
        index_document: str = "index.html",
        templates_dir: Path | None = None,
    ) -> None:
        self.output_root = output_root
        self.base_url = base_url
        self.index_document = index_document
        self.templates_dir = templates_dir or PACKAGE_TEMPLATES / DEFAULT_TEMPLATE_NAME
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("redirect.jinja")

    def run(self, redirects: cabc.Iterable[Redirect]) -> list[Path]:
        """Write every redirect stub and return the written paths in order."""
        written: list[Path] = []
        for redirect in redirects:
            output_path = redirect_path(
                self.output_root, redirect.source, self.index_document
            )
            target = resolve_target(self.base_url, redirect.target)
            html = self.template.render(target=target)
            if not html.endswith("\n"):
                html += "\n"
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            written.append(output_path)
        return written


__all__ = ["RedirectWriter", "redirect_path", "resolve_target"]
