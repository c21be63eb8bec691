"""Pure field normalizers used by the LookPost validator and builder.

Every function here accepts absent or malformed input and returns a usable
value instead of raising.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any
from urllib.parse import urlsplit

from app.services.lookpost.constants import (
    BRAND_TONE_TABLE,
    DEFAULT_BRAND_TONE_KEY,
    DEFAULT_LANGUAGE_TAG,
    DEFAULT_LOCALE,
    DEFAULT_POST_TIME,
    SEO_KEYWORD_LIMIT,
    SEO_KEYWORD_MIN_LENGTH,
)

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
_CANONICAL_TIME_RE = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")
_LOOSE_TIME_RE = re.compile(r"(\d{1,2})(?:\s*[:hH.]\s*(\d{1,2})|(\d{2}))?")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def validate_hex_color(value: Any) -> bool:
    """Return True for `#RRGGBB` strings (case-insensitive), nothing else."""
    return isinstance(value, str) and bool(_HEX_COLOR_RE.match(value))


def validate_url(value: Any) -> bool:
    """Return True for absolute http(s) URLs with a host."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = urlsplit(value.strip())
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def detect_locale(language_tag: str | None) -> str:
    """Map a UI language tag such as `pt-BR` or `en` onto a supported locale."""
    tag = (language_tag or DEFAULT_LANGUAGE_TAG).strip().replace("_", "-").lower()

    if tag.startswith("pt-br"):
        return "pt-BR"
    if tag.startswith("pt"):
        return "pt-PT"
    if tag.startswith("en"):
        return "en-US"
    if tag.startswith("es"):
        return "es-ES"

    return DEFAULT_LOCALE


def normalize_time(value: Any) -> str:
    """Normalize a suggested posting time to 24h `HH:mm`.

    `"14:30"` is returned unchanged, `"7:5"` becomes `"07:05"` and `"9"`
    becomes `"09:00"`. Anything unparseable or out of range falls back to
    `DEFAULT_POST_TIME`.
    """
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_POST_TIME

    if _CANONICAL_TIME_RE.match(value):
        return value

    match = _LOOSE_TIME_RE.search(value)
    if not match:
        return DEFAULT_POST_TIME

    hour = int(match.group(1))
    minute_text = match.group(2) or match.group(3) or "0"
    minute = int(minute_text)
    if hour > 23 or minute > 59:
        return DEFAULT_POST_TIME

    return f"{hour:02d}:{minute:02d}"


def normalize_hashtags(tags: Any) -> list[str]:
    """Strip whitespace, ensure a leading `#` and drop empty tags."""
    if not isinstance(tags, list):
        return []

    normalized: list[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        cleaned = _WHITESPACE_RE.sub("", tag.strip())
        if not cleaned.startswith("#"):
            cleaned = f"#{cleaned}"
        if len(cleaned) > 1:
            normalized.append(cleaned)
    return normalized


def generate_seo_keywords(text: Any) -> list[str]:
    """Return up to eight of the most frequent words longer than three letters.

    Ties keep first-seen order. There is no stop-word list; the length filter
    is the only noise reduction.
    """
    if not isinstance(text, str):
        return []

    cleaned = _PUNCTUATION_RE.sub(" ", text.lower())
    words = [word for word in cleaned.split() if len(word) >= SEO_KEYWORD_MIN_LENGTH]
    frequency = Counter(words)

    ranked = sorted(frequency.items(), key=lambda item: -item[1])
    return [word for word, _count in ranked[:SEO_KEYWORD_LIMIT]]


def normalize_brand_tone(tone: Any, locale: str) -> str:
    """Canonicalize a free-text brand tone into the phrase for `locale`.

    Absent tones default to the elegant phrase. Tones matching no table entry
    are returned unchanged.
    """
    table = dict(BRAND_TONE_TABLE)
    if not isinstance(tone, str) or not tone:
        return _tone_phrase(table[DEFAULT_BRAND_TONE_KEY], locale)

    lowered = tone.lower()
    for key, translations in BRAND_TONE_TABLE:
        if key in lowered:
            return _tone_phrase(translations, locale)

    return tone


def count_words(text: Any) -> int:
    """Count whitespace-separated tokens; blank or missing text counts as 0."""
    if not isinstance(text, str):
        return 0
    return len(text.split())


def _tone_phrase(translations: dict[str, str], locale: str) -> str:
    return translations.get(locale) or translations[DEFAULT_LOCALE]
