"""Load site configuration and redirect manifests into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _build_redirect, _normalize_base_url, _optional_str, _parse_bool
from .models import DEFAULT_TEMPLATE_NAME, Redirect, SiteConfig, SiteConfigError

CONFIG_FILENAME = "config.yaml"
REDIRECTS_FILENAME = "redirects.yaml"


def _load_yaml(path: Path) -> object:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        return loader.load(handle)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML document describing site-wide metadata.

    Parameters
    ----------
    path : Path
        Filesystem path to ``config.yaml`` (conventionally
        ``content/.config/config.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied and the base URL normalised.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If ``title`` or ``baseurl`` are missing or a field has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sectioned_pages.config import load_site_config
    >>> config = load_site_config(Path("content/.config/config.yaml"))  # doctest: +SKIP
    >>> config.base_url  # doctest: +SKIP
    'https://example.com'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loaded = _load_yaml(path) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    title = _optional_str(raw.get("title"))
    if not title:
        msg = "Site configuration is missing 'title'."
        raise SiteConfigError(msg)
    defaults = SiteConfig(title=title, base_url="")

    return SiteConfig(
        title=title,
        base_url=_normalize_base_url(raw.get("baseurl")),
        domain=_optional_str(raw.get("domain")),
        email=_optional_str(raw.get("email")),
        github=_optional_str(raw.get("github")),
        linkedin=_optional_str(raw.get("linkedin")),
        twitter=_optional_str(raw.get("twitter")),
        template_name=_optional_str(raw.get("templatename")) or DEFAULT_TEMPLATE_NAME,
        analytics=_optional_str(raw.get("analytics")),
        og_type=_optional_str(raw.get("ogtype")) or defaults.og_type,
        og_image=_optional_str(raw.get("ogimage")),
        favicon=_optional_str(raw.get("favicon")) or defaults.favicon,
        pygments_style=_optional_str(raw.get("pygments_style"))
        or defaults.pygments_style,
        sort_navigation=_parse_bool(
            raw.get("sort_navigation"), default=defaults.sort_navigation
        ),
        index_document=_optional_str(raw.get("index_document"))
        or defaults.index_document,
    )


def load_redirects(path: Path) -> list[Redirect]:
    """Load the optional redirect manifest.

    The manifest is a YAML sequence of ``{from, to}`` mappings. A missing file
    yields an empty list; any other structure raises :class:`SiteConfigError`.
    """
    if not path.exists():
        return []
    loaded = _load_yaml(path)
    if loaded is None:
        return []
    if not isinstance(loaded, list):
        msg = f"Redirect manifest '{path}' must be a list of mappings."
        raise SiteConfigError(msg)
    return [_build_redirect(idx, entry) for idx, entry in enumerate(loaded, start=1)]


__all__ = [
    "CONFIG_FILENAME",
    "REDIRECTS_FILENAME",
    "load_redirects",
    "load_site_config",
]
