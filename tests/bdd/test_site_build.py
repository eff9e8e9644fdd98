"""Behaviour tests for building a sectioned site from a content tree.

The scenarios live in ``features/site_build.feature``. Each one writes a
small content tree below ``tmp_path``, runs the generator with the packaged
default templates, and inspects the written documents with BeautifulSoup.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_site_build.py -v
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from sectioned_pages.config import BuildPaths, load_site_config
from sectioned_pages.generator import SiteGenerator

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "site_build.feature"
)
scenarios(FEATURE_FILE)

CONFIG = "title: Example\nbaseurl: https://example.com\n"
POST = """---
title: "Hello"
---
## One

## Two

## Three
"""


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


@given("a content tree with a post in the notes category of the blog section")
def given_blog_post(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write ``content/1_blog/_notes/post.md`` with three ``h2`` headings."""
    content = tmp_path / "content"
    _write(content / ".config" / "config.yaml", CONFIG)
    _write(content / "1_blog" / "_notes" / "post.md", POST)
    scenario_state["project"] = tmp_path


@given("a content tree whose sections are discovered out of order")
def given_unordered_sections(
    tmp_path: Path, scenario_state: dict[str, object]
) -> None:
    """Write sections whose lexical order differs from their numeric order."""
    content = tmp_path / "content"
    _write(content / ".config" / "config.yaml", CONFIG)
    _write(content / "10_work" / "_clients" / "case.md", "Case.\n")
    _write(content / "9_blog" / "_notes" / "post.md", POST)
    scenario_state["project"] = tmp_path


@when("I generate the site")
def when_generate(scenario_state: dict[str, object]) -> None:
    """Run the generator over the prepared project."""
    project = scenario_state["project"]
    assert isinstance(project, Path)
    site = load_site_config(project / "content" / ".config" / "config.yaml")
    paths = BuildPaths.for_project(project, site)
    scenario_state["written"] = SiteGenerator(site, paths).run()
    scenario_state["out"] = paths.output


@then("the post is written without section and category markers")
def then_post_path(scenario_state: dict[str, object]) -> None:
    """The post lands at ``out/blog/notes/post.html``."""
    out = scenario_state["out"]
    assert isinstance(out, Path)
    post = out / "blog" / "notes" / "post.html"
    assert post in _written_paths(scenario_state["written"])
    scenario_state["post"] = _soup(post)


@then("the post shows a table of contents for its three headings")
def then_post_toc(scenario_state: dict[str, object]) -> None:
    """The contents block links all three headings."""
    soup = scenario_state["post"]
    assert isinstance(soup, BeautifulSoup)
    toc = soup.select_one(".page__toc")
    assert toc is not None
    assert [a.get_text() for a in toc.find_all("a")] == ["One", "Two", "Three"]


@then("the navigation lists the blog section before the notes category")
def then_navigation(scenario_state: dict[str, object]) -> None:
    """The global menu nests Notes under Blog."""
    soup = scenario_state["post"]
    assert isinstance(soup, BeautifulSoup)
    section_item = soup.select_one(".site-nav__list > li")
    assert section_item is not None
    assert section_item.a.get_text() == "Blog"
    assert section_item.ul.li.a.get_text() == "Notes"


@then("the sitemap lists the post as monthly content")
def then_sitemap(scenario_state: dict[str, object]) -> None:
    """Content pages change monthly with priority 0.5."""
    out = scenario_state["out"]
    assert isinstance(out, Path)
    soup = BeautifulSoup(
        (out / "sitemap.xml").read_text(encoding="utf-8"), "html.parser"
    )
    entry = next(
        url
        for url in soup.find_all("url")
        if url.loc.get_text() == "https://example.com/blog/notes/post"
    )
    assert entry.changefreq.get_text() == "monthly"
    assert entry.priority.get_text() == "0.5"


@then("the footer lists the sections by their numeric prefix")
def then_footer_order(scenario_state: dict[str, object]) -> None:
    """Section 9 precedes section 10 even though ``10_`` sorts first."""
    out = scenario_state["out"]
    assert isinstance(out, Path)
    soup = _soup(out / "blog" / "notes" / "post.html")
    labels = [a.get_text() for a in soup.select(".site-footer__sections a")]
    assert labels == ["Blog", "Work"]


def _written_paths(value: object) -> list[Path]:
    assert isinstance(value, list)
    return value
