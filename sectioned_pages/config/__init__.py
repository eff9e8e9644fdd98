"""Load and validate site configuration YAML for sectioned_pages builds.

This subpackage parses the content tree's ``.config/config.yaml`` and optional
``.config/redirects.yaml``, applies defaults, normalises the base URL, and
produces slotted dataclasses (:class:`SiteConfig`, :class:`Redirect`,
:class:`BuildPaths`) that the generator threads explicitly through every stage.

Examples
--------
>>> from pathlib import Path
>>> from sectioned_pages.config import load_site_config
>>> site = load_site_config(Path("content/.config/config.yaml"))  # doctest: +SKIP
>>> site.title  # doctest: +SKIP
'My Site'
"""

from .loader import (
    CONFIG_FILENAME,
    REDIRECTS_FILENAME,
    load_redirects,
    load_site_config,
)
from .models import BuildPaths, Redirect, SiteConfig, SiteConfigError

__all__ = [
    "CONFIG_FILENAME",
    "REDIRECTS_FILENAME",
    "BuildPaths",
    "Redirect",
    "SiteConfig",
    "SiteConfigError",
    "load_redirects",
    "load_site_config",
]
