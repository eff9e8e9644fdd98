"""Compile directory trees of Markdown into sectioned static sites.

Directory names drive the site structure: ``<n>_<name>/`` folders become
Sections, ``_<name>/`` folders become Categories, and every Markdown file is
rendered into a page with a generated table of contents and global navigation.
This package exposes the CLI entry points used by ``uv run pages``.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from sectioned_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
