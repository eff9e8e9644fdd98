"""Cyclopts CLI entrypoint for compiling sectioned static sites.

The ``pages`` console script defined here builds a site from a ``content/``
tree into the sibling ``out/`` directory and can explain how the directory
naming conventions classify individual paths. Typical usage involves running
``pages generate`` locally or in CI, and ``pages classify`` when a page does
not show up where expected in the navigation.

Examples
--------
Build the site in the current project:

>>> from sectioned_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory with debug logging:

>>> from sectioned_pages.cli import app
>>> app(["generate", "--output", "dist", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONFIG_DIRNAME
from .classifier import classify as classify_path
from .config import CONFIG_FILENAME, BuildPaths, load_site_config
from .generator import SiteGenerator
from .rewriter import strip_markers

DEFAULT_PROJECT = Path()
DEFAULT_CONTENT = Path("content")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT
    )


@app.command(help="Compile the content tree into a static site.")
def generate(
    *,
    project: typ.Annotated[
        Path, Parameter(help="Project root holding content/ and templates/")
    ] = DEFAULT_PROJECT,
    content: typ.Annotated[
        Path | None,
        Parameter(help="Override the content folder", env_var="INPUT_CONTENT"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to the site config", env_var="INPUT_CONFIG"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log every classified file")
    ] = False,
) -> None:
    """Build every page, index page, the sitemap and redirect stubs.

    Parameters
    ----------
    project : Path, optional
        Project root; ``content/`` and ``templates/`` are resolved against it.
    content : Path or None, optional
        Content root override; defaults to ``<project>/content``.
    output : Path or None, optional
        Output root override; defaults to ``out/`` next to the content root.
    config : Path or None, optional
        Site configuration file; defaults to
        ``<content>/.config/config.yaml``.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the site and prints each generated path.

    Raises
    ------
    FileNotFoundError
        If the configuration file is missing; nothing is written.
    SiteConfigError
        If the configuration or redirect manifest is invalid.
    """
    _configure_logging(verbose=verbose)
    content_root = content or project / "content"
    config_path = config or content_root / CONFIG_DIRNAME / CONFIG_FILENAME
    site_config = load_site_config(config_path)
    paths = BuildPaths.for_project(
        project, site_config, content=content_root, output=output
    )
    for path in SiteGenerator(site_config, paths).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Show the Section and Category inferred for each path.")
def classify(
    *paths: Path,
    content: typ.Annotated[
        Path, Parameter(help="Content root the paths are relative to")
    ] = DEFAULT_CONTENT,
) -> None:
    """Print the classification and rewritten path of each argument.

    Parameters
    ----------
    *paths : Path
        Source paths, either relative to ``content`` or below it.
    content : Path, optional
        Content root stripped from paths that live below it.
    """
    for path in paths:
        relative = path.relative_to(content) if path.is_relative_to(content) else path
        result = classify_path(relative)
        section = result.section
        category = result.category
        print(
            f"{path}: section={section.slug or '-'} (index {section.index})"
            f" category={category.slug or '-'}"
            f" parent={category.parent_slug or '-'}"
            f" -> {strip_markers(relative, result).as_posix()}"
        )


def main() -> None:
    """Invoke the Cyclopts application that powers the ``pages`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
