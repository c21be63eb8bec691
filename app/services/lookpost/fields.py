"""Coalescing accessors over loosely populated campaign records.

Stored campaigns come from generation runs, manual edits and older app
versions, so any field may be missing, null or the wrong type. These helpers
turn each read into an explicit, typed fallback.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from app.services.lookpost.constants import SUPPORTED_LOCALES


def as_dict(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list | tuple) else []


def as_text(value: Any) -> str | None:
    """Return a non-empty string or None."""
    if isinstance(value, str) and value:
        return value
    return None


def as_str_list(value: Any) -> list[str]:
    return [item for item in as_list(value) if isinstance(item, str)]


def as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None


def as_identifier(value: Any) -> str | None:
    """Return a present string or numeric id as text, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int) or (isinstance(value, float) and math.isfinite(value)):
        return str(value)
    return as_text(value)


def campaign_locale(raw: Mapping[str, Any]) -> str | None:
    """Return the stored locale when it is one the schema supports."""
    locale = raw.get("locale")
    if isinstance(locale, str) and locale in SUPPORTED_LOCALES:
        return locale
    return None


def campaign_input(raw: Mapping[str, Any]) -> dict[str, Any]:
    return as_dict(raw.get("input"))


def campaign_brief(raw: Mapping[str, Any]) -> str | None:
    return as_text(raw.get("prompt")) or as_text(campaign_input(raw).get("brief"))


def campaign_product(raw: Mapping[str, Any]) -> dict[str, Any]:
    return as_dict(raw.get("product"))


def campaign_instagram(raw: Mapping[str, Any]) -> dict[str, Any]:
    return as_dict(raw.get("instagram"))


def instagram_field(raw: Mapping[str, Any], camel_key: str, snake_key: str) -> Any:
    """Read an Instagram sub-field stored in camelCase, falling back to snake_case."""
    instagram = campaign_instagram(raw)
    value = instagram.get(camel_key)
    if value is None:
        value = instagram.get(snake_key)
    return value


def instagram_caption(raw: Mapping[str, Any]) -> str | None:
    return as_text(instagram_field(raw, "caption", "caption"))


def instagram_hashtags(raw: Mapping[str, Any]) -> list[Any] | None:
    """Return the raw hashtag list, or None when the field is absent or not a list."""
    value = instagram_field(raw, "hashtags", "hashtags")
    return list(value) if isinstance(value, list) else None


def instagram_call_to_action(raw: Mapping[str, Any]) -> str | None:
    return as_text(instagram_field(raw, "callToAction", "call_to_action"))


def instagram_alt_text(raw: Mapping[str, Any]) -> str | None:
    return as_text(instagram_field(raw, "altText", "alt_text"))


def instagram_suggested_time(raw: Mapping[str, Any]) -> str | None:
    return as_text(instagram_field(raw, "suggestedTime", "suggested_post_time"))


def image_analysis(raw: Mapping[str, Any]) -> dict[str, Any]:
    return as_dict(raw.get("image_analysis"))


def legacy_schema(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Return the legacy `lookpost_schema` blob written by older app versions."""
    return as_dict(raw.get("lookpost_schema"))
