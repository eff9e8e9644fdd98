"""Map content source paths onto output paths and canonical public URLs.

Rewriting works on path segments: only the segment that matched the Section
pattern loses its ``<index>_`` marker and only the segments that matched the
Category pattern lose their leading ``_``. Every other segment, including file
names that legitimately contain underscores, is left untouched.

Example
-------
>>> from pathlib import Path
>>> from sectioned_pages.rewriter import canonical_url, rewrite
>>> source = Path("content/1_blog/_notes/post.md")
>>> location = rewrite(source, Path("content"), Path("out"))
>>> location.path.as_posix()
'out/blog/notes/post.html'
>>> canonical_url("https://example.com", location.path, Path("out"))
'https://example.com/blog/notes/post'
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
from pathlib import Path, PurePath, PurePosixPath

from .classifier import Classification, classify


@dc.dataclass(slots=True, frozen=True)
class OutputLocation:
    """Rewritten output path together with its URL path below the output root."""

    path: Path
    url_path: str


def strip_markers(relative: PurePath, classification: Classification) -> PurePosixPath:
    """Return ``relative`` with Section and Category markers removed.

    Parameters
    ----------
    relative : PurePath
        Path below the content root.
    classification : Classification
        Result of :func:`~sectioned_pages.classifier.classify` for the same
        path; its segment positions select which directories are rewritten.

    Returns
    -------
    PurePosixPath
        Marker-free relative path.
    """
    parts = list(relative.parts)
    if classification.section_segment is not None:
        parts[classification.section_segment] = classification.section.slug
    for position in classification.category_segments:
        parts[position] = parts[position][1:]
    return PurePosixPath(*parts) if parts else PurePosixPath()


def rewrite(
    source: Path,
    content_root: Path,
    output_root: Path,
    *,
    source_suffix: str = ".md",
    output_suffix: str = ".html",
    classification: Classification | None = None,
) -> OutputLocation:
    """Compute the output location for ``source``.

    The path is re-rooted from ``content_root`` to ``output_root``, its
    ``source_suffix`` replaced by ``output_suffix``, and its convention markers
    stripped segment by segment. Files with other suffixes keep them, so
    assets can be rewritten with the same rules.
    """
    relative = source.relative_to(content_root)
    resolved = classification or classify(relative)
    stripped = strip_markers(relative, resolved)
    if stripped.suffix == source_suffix:
        stripped = stripped.with_suffix(output_suffix)
    return OutputLocation(
        path=output_root.joinpath(*stripped.parts), url_path=stripped.as_posix()
    )


def canonical_url(
    base_url: str,
    output_path: Path,
    output_root: Path,
    *,
    index_document: str = "index.html",
) -> str:
    """Return the public URL for ``output_path``.

    The URL is ``base_url`` joined with the path below ``output_root`` with its
    extension removed. The site root index document maps to ``base_url``
    exactly.
    """
    base = base_url.rstrip("/")
    relative = PurePosixPath(output_path.relative_to(output_root).as_posix())
    if relative.as_posix() == index_document:
        return base
    without_suffix = relative.with_suffix("") if relative.suffix else relative
    return f"{base}/{without_suffix.as_posix()}"


def rewrite_link(
    target: str,
    source_dir: PurePosixPath,
    *,
    source_suffix: str = ".md",
    output_suffix: str = ".html",
) -> str | None:
    """Rewrite a relative link to another source document.

    Parameters
    ----------
    target : str
        Link path (without query or fragment) found in the rendered markup.
    source_dir : PurePosixPath
        Directory of the linking document relative to the content root.

    Returns
    -------
    str | None
        Link relative to the linking document's *output* directory, or
        ``None`` when the target is not a relative Markdown source or escapes
        the content root.
    """
    if not target.endswith(source_suffix) or target.startswith("/"):
        return None
    joined = posixpath.normpath(posixpath.join(source_dir.as_posix(), target))
    if joined.startswith("../") or joined in {"..", "."}:
        return None
    target_path = PurePosixPath(joined)
    stripped_target = strip_markers(target_path, classify(target_path))
    stripped_target = stripped_target.with_suffix(output_suffix)
    # The linking directory is rewritten as if it held a document.
    placeholder = source_dir / "placeholder"
    stripped_dir = strip_markers(placeholder, classify(placeholder)).parent
    return posixpath.relpath(stripped_target.as_posix(), stripped_dir.as_posix() or ".")


__all__ = [
    "OutputLocation",
    "canonical_url",
    "rewrite",
    "rewrite_link",
    "strip_markers",
]
