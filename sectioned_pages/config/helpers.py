"""Utility helpers shared by the sectioned_pages configuration loader."""

from __future__ import annotations

import typing as typ

from .models import Redirect, SiteConfigError

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


def _optional_str(value: object | None) -> str:
    """Return a stripped string value or an empty string when unset."""
    if value is None:
        return ""
    return str(value).strip()


def _normalize_base_url(value: object | None) -> str:
    """Return ``value`` without trailing slashes, raising when it is blank."""
    text = _optional_str(value)
    if not text:
        msg = "Site configuration is missing 'baseurl'."
        raise SiteConfigError(msg)
    return text.rstrip("/")


def _parse_bool(value: object | None, *, default: bool) -> bool:
    """Interpret YAML booleans and their common string spellings."""
    match value:
        case None:
            return default
        case bool():
            return value
        case str() as text if text.strip().lower() in TRUTHY:
            return True
        case str() as text if text.strip().lower() in FALSY:
            return False
        case _:
            msg = f"Expected a boolean value, got {value!r}."
            raise SiteConfigError(msg)


def _build_redirect(index: int, payload: object) -> Redirect:
    """Build a Redirect from one manifest entry."""
    if not isinstance(payload, dict):
        msg = f"Redirect entry {index} must be a mapping with 'from' and 'to'."
        raise SiteConfigError(msg)
    entry = typ.cast("dict[str, typ.Any]", payload)
    source = _optional_str(entry.get("from"))
    target = _optional_str(entry.get("to"))
    if not source or not target:
        msg = f"Redirect entry {index} needs both 'from' and 'to'."
        raise SiteConfigError(msg)
    return Redirect(source=source, target=target)


__all__ = [
    "_build_redirect",
    "_normalize_base_url",
    "_optional_str",
    "_parse_bool",
]
