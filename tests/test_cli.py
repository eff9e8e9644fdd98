"""Tests for the ``pages`` command-line entrypoints."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from sectioned_pages import cli
from sectioned_pages.config import BuildPaths, SiteConfigError

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_generate_builds_site(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """``generate`` writes the site and reports each path."""
    content = tmp_path / "content"
    _write(content / ".config" / "config.yaml", "title: T\nbaseurl: https://t.dev\n")
    _write(content / "1_blog" / "_notes" / "post.md", "# Post\n")

    cli.generate(project=tmp_path)

    assert (tmp_path / "out" / "blog" / "notes" / "post.html").is_file()
    output = capsys.readouterr().out
    assert "post.html" in output
    assert "sitemap.xml" in output


def test_generate_honours_overrides(tmp_path: Path) -> None:
    """Content, output and config locations can be overridden."""
    content = tmp_path / "src"
    config = tmp_path / "site.yaml"
    _write(config, "title: T\nbaseurl: https://t.dev\n")
    _write(content / "page.md", "Body\n")

    cli.generate(
        project=tmp_path, content=content, output=tmp_path / "dist", config=config
    )

    assert (tmp_path / "dist" / "page.html").is_file()


def test_generate_without_config_writes_nothing(tmp_path: Path) -> None:
    """A missing configuration aborts before the output root is touched."""
    _write(tmp_path / "content" / "page.md", "Body\n")

    with pytest.raises(FileNotFoundError):
        cli.generate(project=tmp_path)

    assert not (tmp_path / "out").exists()


def test_generate_rejects_invalid_redirects(tmp_path: Path) -> None:
    """An invalid redirect manifest aborts before the output root is touched."""
    content = tmp_path / "content"
    _write(content / ".config" / "config.yaml", "title: T\nbaseurl: https://t.dev\n")
    _write(content / ".config" / "redirects.yaml", "from: a\n")

    with pytest.raises(SiteConfigError):
        cli.generate(project=tmp_path)

    assert not (tmp_path / "out").exists()


def test_classify_reports_markers(capsys: pytest.CaptureFixture[str]) -> None:
    """``classify`` explains how each path is interpreted."""
    cli.classify(
        Path("content/1_work/_clients/_acme/file.md"),
        Path("about.md"),
        content=Path("content"),
    )

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == (
        "content/1_work/_clients/_acme/file.md: section=work (index 1)"
        " category=acme parent=clients -> work/clients/acme/file.md"
    )
    assert lines[1] == (
        "about.md: section=- (index 0) category=- parent=- -> about.md"
    )


def test_generate_threads_config_into_generator(
    tmp_path: Path, mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    """The loaded configuration and resolved paths reach the generator."""
    content = tmp_path / "content"
    _write(
        content / ".config" / "config.yaml",
        "title: T\nbaseurl: https://t.dev/\nindex_document: default.htm\n",
    )
    generator_cls = mocker.patch("sectioned_pages.cli.SiteGenerator")
    generator_cls.return_value.run.return_value = [tmp_path / "out" / "a.html"]

    cli.generate(project=tmp_path, verbose=True)

    site, paths = generator_cls.call_args.args
    assert site.base_url == "https://t.dev"
    assert site.index_document == "default.htm"
    assert isinstance(paths, BuildPaths)
    assert paths.output == tmp_path / "out"
    assert capsys.readouterr().out.strip().endswith("a.html")
