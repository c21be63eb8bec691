"""Unit tests for LookPost field normalizers."""

from __future__ import annotations

import pytest

from app.services.lookpost.normalizers import (
    count_words,
    detect_locale,
    generate_seo_keywords,
    normalize_brand_tone,
    normalize_hashtags,
    normalize_time,
    validate_hex_color,
    validate_url,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("#A1B2C3", True),
        ("#a1b2c3", True),
        ("A1B2C3", False),
        ("#A1B2C", False),
        ("#A1B2C3D", False),
        ("#GGGGGG", False),
        (None, False),
        (123456, False),
    ],
)
def test_validate_hex_color(value: object, expected: bool) -> None:
    assert validate_hex_color(value) is expected


def test_validate_url_accepts_http_and_https_only() -> None:
    assert validate_url("https://cdn.example.com/look.png")
    assert validate_url("http://example.com")
    assert not validate_url("ftp://example.com/file")
    assert not validate_url("not a url")
    assert not validate_url("")
    assert not validate_url(None)
    assert not validate_url("https://")


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("pt-BR", "pt-BR"),
        ("pt_br", "pt-BR"),
        ("pt", "pt-PT"),
        ("pt-PT", "pt-PT"),
        ("en-GB", "en-US"),
        ("es", "es-ES"),
        ("fr-FR", "pt-PT"),
        (None, "pt-PT"),
    ],
)
def test_detect_locale(tag: str | None, expected: str) -> None:
    assert detect_locale(tag) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("14:30", "14:30"),
        ("00:00", "00:00"),
        ("7:5", "07:05"),
        ("9", "09:00"),
        ("18h30", "18:30"),
        ("best at 20:15 local", "20:15"),
        ("25:00", "19:00"),
        ("12:75", "19:00"),
        ("evening", "19:00"),
        ("", "19:00"),
        (None, "19:00"),
    ],
)
def test_normalize_time(value: object, expected: str) -> None:
    assert normalize_time(value) == expected


def test_normalize_time_is_a_fixed_point() -> None:
    for value in ("7:5", "9", "18h30", "garbage"):
        once = normalize_time(value)
        assert normalize_time(once) == once


def test_normalize_hashtags_prefixes_strips_and_drops_empty() -> None:
    tags = ["fashion", " #ootd ", "street style", "#", "  ", 42, "#look"]

    assert normalize_hashtags(tags) == ["#fashion", "#ootd", "#streetstyle", "#look"]


def test_normalize_hashtags_handles_non_list() -> None:
    assert normalize_hashtags(None) == []
    assert normalize_hashtags("#fashion") == []


def test_generate_seo_keywords_ranks_by_frequency_with_stable_ties() -> None:
    text = "Linen blazer, linen trousers and a silk scarf. Blazer season!"

    keywords = generate_seo_keywords(text)

    assert keywords[:2] == ["linen", "blazer"]
    assert keywords[2:] == ["trousers", "silk", "scarf", "season"]
    assert "and" not in keywords


def test_generate_seo_keywords_caps_at_eight() -> None:
    text = " ".join(f"word{index}" for index in range(20))

    assert len(generate_seo_keywords(text)) == 8


def test_generate_seo_keywords_keeps_accented_words() -> None:
    assert generate_seo_keywords("Verão elegância verão") == ["verão", "elegância"]


def test_generate_seo_keywords_non_string() -> None:
    assert generate_seo_keywords(None) == []


def test_normalize_brand_tone_maps_known_tones_per_locale() -> None:
    assert normalize_brand_tone("Elegant", "en-US") == "elegant and inspiring"
    assert normalize_brand_tone("very modern vibe", "es-ES") == "moderno y audaz"
    assert normalize_brand_tone("casual", "pt-PT") == "casual chic"


def test_normalize_brand_tone_defaults_and_passthrough() -> None:
    assert normalize_brand_tone(None, "pt-BR") == "elegante e inspirador"
    assert normalize_brand_tone("", "en-US") == "elegant and inspiring"
    assert normalize_brand_tone("playful", "en-US") == "playful"


def test_normalize_brand_tone_is_a_fixed_point() -> None:
    for locale in ("pt-PT", "pt-BR", "en-US", "es-ES"):
        for tone in ("elegant", "modern", "casual", None):
            once = normalize_brand_tone(tone, locale)
            assert normalize_brand_tone(once, locale) == once


def test_count_words() -> None:
    assert count_words("one two  three\nfour") == 4
    assert count_words("   ") == 0
    assert count_words("") == 0
    assert count_words(None) == 0
