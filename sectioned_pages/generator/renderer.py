"""Render Markdown sources with YAML front matter into HTML fragments."""

from __future__ import annotations

import datetime as dt
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from sectioned_pages.models import RenderedDocument

from .link_rewriter import SourceLinkExtension

if typ.TYPE_CHECKING:
    from pathlib import PurePosixPath

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?", re.DOTALL | re.MULTILINE
)
CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class RenderError(RuntimeError):
    """Raised when a source document cannot be decoded or parsed."""


def split_front_matter(text: str) -> tuple[dict[str, str | None], str]:
    """Separate a leading ``---`` YAML block from the Markdown body.

    Parameters
    ----------
    text : str
        Full source document.

    Returns
    -------
    tuple[dict[str, str | None], str]
        Front matter keys (lower-cased) mapped to strings, or ``None`` for
        explicit nulls, and the remaining Markdown body.

    Raises
    ------
    RenderError
        If the front matter block is not valid YAML or not a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return {}, text
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(match.group(1))
    except YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise RenderError(msg) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping of keys to values."
        raise RenderError(msg)
    front_matter = {
        str(key).lower(): _stringify(value) for key, value in loaded.items()
    }
    return front_matter, text[match.end() :]


def _stringify(value: object) -> str | None:
    match value:
        case None:
            return None
        case str():
            return value.strip()
        case dt.date():
            return value.isoformat()
        case list() | tuple():
            return ", ".join(str(item).strip() for item in value)
        case bool():
            return "true" if value else "false"
        case _:
            return str(value)


class HtmlContentRenderer:
    """Render Markdown documents with consistent extensions and highlighting."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer for the given Pygments style."""
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(
        self, source: bytes | str, *, source_dir: PurePosixPath | None = None
    ) -> RenderedDocument:
        """Render one source document.

        Parameters
        ----------
        source : bytes | str
            Raw document, decoded as UTF-8 when given as bytes.
        source_dir : PurePosixPath, optional
            Directory of the document below the content root; enables rewriting
            of relative links to other sources.

        Returns
        -------
        RenderedDocument
            HTML fragment and parsed front matter.

        Raises
        ------
        RenderError
            If the bytes are not UTF-8 or the front matter is malformed.
        """
        if isinstance(source, bytes):
            try:
                text = source.decode("utf-8")
            except UnicodeDecodeError as exc:
                msg = f"Source is not valid UTF-8: {exc}"
                raise RenderError(msg) from exc
        else:
            text = source
        front_matter, body = split_front_matter(text)
        link_extension = None
        if source_dir is not None:
            link_extension = SourceLinkExtension(source_dir)
        return RenderedDocument(
            body=self.markdown(body, link_extension=link_extension),
            front_matter=front_matter,
        )

    def markdown(self, text: str, *, link_extension: Extension | None = None) -> str:
        """Render Markdown into HTML with heading ids and highlighted code."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "toc",
        ]
        if link_extension is not None:
            extensions.append(link_extension)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    @staticmethod
    def _annotate_codehilite(html: str, source_markdown: str) -> str:
        """Attach a ``data-language`` attribute to each highlighted block."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(_match: re.Match[str]) -> str:
            lang = escape(next(lang_iter, "text"), quote=True)
            return f'<div class="codehilite" data-language="{lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = [
    "CODE_BLOCK_PATTERN",
    "HtmlContentRenderer",
    "RenderError",
    "split_front_matter",
]
