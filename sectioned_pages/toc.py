"""Build per-page tables of contents from rendered heading elements.

Headings are read from the rendered HTML fragment, not the Markdown source, so
only headings that the renderer gave an ``id`` can be linked. ``h1`` is the page
title and never enters the contents list; ``h2``..``h6`` map to levels 1..5.

The contents list is produced by a level-stack state machine rather than a tree
build: each token either opens exactly one nested list (when it is deeper than
the innermost open list) or closes every open list deeper than itself. A jump
from level 1 straight to level 4 therefore opens one list, not three.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from html import escape

from bs4 import BeautifulSoup

if typ.TYPE_CHECKING:
    import collections.abc as cabc

HEADING_TAGS = ("h2", "h3", "h4", "h5", "h6")
MIN_TOC_HEADINGS = 3


@dc.dataclass(slots=True, frozen=True)
class HeadingToken:
    """One linkable heading.

    Attributes
    ----------
    level : int
        Depth below the page title, ``1`` for ``h2`` through ``5`` for ``h6``.
    anchor : str
        Fragment identifier of the heading element.
    label : str
        Visible heading text.
    """

    level: int
    anchor: str
    label: str


def extract_headings(body_html: str) -> list[HeadingToken]:
    """Return heading tokens for every ``h2``..``h6`` carrying an ``id``."""
    if not body_html.strip():
        return []
    soup = BeautifulSoup(body_html, "html.parser")
    tokens: list[HeadingToken] = []
    for element in soup.find_all(list(HEADING_TAGS)):
        anchor = element.get("id")
        if not anchor:
            continue
        level = int(element.name[1]) - 1
        tokens.append(
            HeadingToken(
                level=level,
                anchor=str(anchor),
                label=element.get_text().strip(),
            )
        )
    return tokens


class TocBuilder:
    """Level-stack state machine emitting a nested ``<ul>`` contents list."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._stack: list[int] = []
        self.opened = 0
        self.closed = 0
        self.count = 0

    @property
    def depth(self) -> int:
        """Return the number of lists currently open."""
        return len(self._stack)

    def push(self, token: HeadingToken) -> None:
        """Feed one heading token into the state machine."""
        if not self._stack or token.level > self._stack[-1]:
            self._open(token.level)
        else:
            self._parts.append("</li>")
            while len(self._stack) > 1 and self._stack[-1] > token.level:
                self._close("</ul></li>")
        href = escape(token.anchor, quote=True)
        self._parts.append(f'<li><a href="#{href}">{escape(token.label)}</a>')
        self.count += 1

    def finish(self) -> str:
        """Close every remaining list and return the accumulated markup."""
        while self._stack:
            self._close("</li></ul>")
        return "".join(self._parts)

    def _open(self, level: int) -> None:
        self._parts.append("<ul>")
        self._stack.append(level)
        self.opened += 1

    def _close(self, markup: str) -> None:
        self._parts.append(markup)
        self._stack.pop()
        self.closed += 1


def build_toc(
    tokens: cabc.Iterable[HeadingToken], *, threshold: int = MIN_TOC_HEADINGS
) -> str:
    """Return the contents list for ``tokens`` or ``""`` below ``threshold``.

    Parameters
    ----------
    tokens : Iterable[HeadingToken]
        Heading tokens in document order.
    threshold : int, optional
        Minimum number of headings before a contents block is produced.

    Returns
    -------
    str
        Well-formed nested list markup, or an empty string.
    """
    materialized = list(tokens)
    if len(materialized) < threshold:
        return ""
    builder = TocBuilder()
    for token in materialized:
        builder.push(token)
    return builder.finish()


__all__ = [
    "HEADING_TAGS",
    "MIN_TOC_HEADINGS",
    "HeadingToken",
    "TocBuilder",
    "build_toc",
    "extract_headings",
]
