"""Utility helpers shared by the catalog loader."""

from __future__ import annotations

import typing as typ

from .models import _title_from_key

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: str | list[object] | None) -> list[str]:
    """Normalize a scalar or list value into a list of non-empty strings."""
    if isinstance(value, str):
        text = value.strip()
        return [text] if text else []
    if isinstance(value, list):
        normalized: list[str] = []
        for item in value:
            text = str(item).strip()
            if text:
                normalized.append(text)
        return normalized
    return []


def _derive_title(key: str, payload: cabc.Mapping[str, typ.Any]) -> str:
    """Return the explicit ``title`` or a title derived from the key."""
    return _optional_str(payload.get("title")) or _title_from_key(key)


__all__ = ["_derive_title", "_optional_str", "_string_list"]
