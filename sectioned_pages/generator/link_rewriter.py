"""Markdown extension rewriting links between source documents.

Authors link to sibling sources by their on-disk names (``../_notes/post.md``).
Those names carry Section and Category markers that the build strips from
output paths, so the links are rewritten to the marker-free ``.html`` targets.
"""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from sectioned_pages.rewriter import rewrite_link

if typ.TYPE_CHECKING:
    from pathlib import PurePosixPath
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    PurePosixPath = typ.Any

EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


class SourceLinkExtension(Extension):
    """Rewrite relative Markdown links to the documents they become."""

    def __init__(self, source_dir: PurePosixPath) -> None:
        super().__init__()
        self.source_dir = source_dir

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the source-link treeprocessor on the Markdown instance."""
        processor = SourceLinkTreeprocessor(md, self.source_dir)
        md.treeprocessors.register(processor, "sectioned_source_links", 15)


class SourceLinkTreeprocessor(Treeprocessor):
    """Point ``<a href="*.md">`` elements at their rewritten output files."""

    def __init__(self, md: Markdown, source_dir: PurePosixPath) -> None:
        super().__init__(md)
        self.source_dir = source_dir

    def run(self, root: Element) -> Element:
        """Rewrite relative anchors in the parsed Markdown tree."""
        for element in root.iter("a"):
            rewritten = self._rewrite(element.get("href"))
            if rewritten:
                element.set("href", rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        if not target:
            return None
        if target.lower().startswith(EXTERNAL_PREFIXES) or target.startswith(
            ("#", "/")
        ):
            return None
        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or not parsed.path:
            return None
        rewritten = rewrite_link(parsed.path, self.source_dir)
        if rewritten is None:
            return None
        if parsed.query:
            rewritten = f"{rewritten}?{parsed.query}"
        if parsed.fragment:
            rewritten = f"{rewritten}#{parsed.fragment}"
        return rewritten


__all__ = ["SourceLinkExtension", "SourceLinkTreeprocessor"]
