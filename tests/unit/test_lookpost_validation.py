"""Unit tests for campaign validation and normalization into the LookPost schema."""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Any

from app.services.lookpost.validation import (
    corrected_campaign_updates,
    lookpost_to_campaign_record,
    validate_and_normalize_campaign,
)

NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)
LONG_TEXT = " ".join(["tailored"] * 60 + ["linen"] * 60)


def _complete_campaign(**overrides: Any) -> dict[str, Any]:
    campaign: dict[str, Any] = {
        "id": "camp-1",
        "user_id": "user-1",
        "title": "Linen Summer Blazer",
        "created_at": "2025-03-01T10:00:00+00:00",
        "locale": "en-US",
        "prompt": "Relaxed linen blazer for a summer evening",
        "input": {"occasion": "Dinner", "audience": "Women 25-40", "budget_hint": "Premium"},
        "centerpiece_image": "https://cdn.example.com/blazer.png",
        "model_image": "https://cdn.example.com/model.png",
        "look_visual": "https://cdn.example.com/look.png",
        "product": {"name": "Linen Blazer", "style": "Minimal", "colors": ["beige"]},
        "look_items": [{"role": "core", "name": "Linen Blazer"}],
        "palette_hex": ["#F5F5DC", "#000000"],
        "short_description": "A relaxed linen blazer.",
        "long_description": LONG_TEXT,
        "seo_keywords": ["linen", "blazer"],
        "brand_tone": "elegant and inspiring",
        "instagram": {
            "caption": "Summer evenings in linen.",
            "hashtags": ["#linen", "#summer"],
            "callToAction": "Shop the look",
            "altText": "Woman wearing a beige linen blazer",
            "suggestedTime": "18:30",
        },
        "governance": {
            "brand_rules_applied": {"tone": "elegant and inspiring"},
            "safety_checks": {"hallucination_risk": "low", "nsfw_risk": "low"},
        },
        "telemetry": {
            "gen_durations_ms": {"look_image": 4100, "descriptions": 900, "instagram": 700},
            "time_saved_minutes": 75,
        },
    }
    campaign.update(overrides)
    return campaign


def _validate(campaign: dict[str, Any], seed: int = 7) -> Any:
    return validate_and_normalize_campaign(
        campaign,
        language="pt",
        rng=random.Random(seed),
        now=NOW,
    )


def test_complete_campaign_is_valid_and_uncorrected() -> None:
    result = _validate(_complete_campaign())

    assert result.valid is True
    assert result.errors == []
    assert result.warnings == []
    assert result.corrected is False
    assert result.validation_log.corrected_fields == []
    assert result.corrected_data.instagram.call_to_action == "Shop the look"
    assert result.corrected_data.instagram.suggested_post_time == "18:30"
    assert result.corrected_data.telemetry.gen_durations_ms.look_image == 4100


def test_minimal_campaign_reports_two_errors_for_missing_visual_and_long_description() -> None:
    campaign = {
        "id": "camp-2",
        "title": "Denim Jacket",
        "short_description": "Classic denim.",
        "instagram": {"caption": "Denim forever"},
    }

    result = _validate(campaign)

    assert result.valid is False
    assert result.errors == [
        "look.image_url must be a valid URL",
        "descriptions.long is required",
    ]
    assert result.corrected is True
    data = result.corrected_data
    assert data.input.brief == "Look featuring Denim Jacket"
    assert data.product.name == "Denim Jacket"
    assert data.look.items[0].role == "core"
    assert data.look.items[0].name == "Denim Jacket"
    assert data.instagram.suggested_post_time == "19:00"
    assert data.instagram.call_to_action == "Descubra mais looks em nosso site ✨"
    assert data.campaign.locale == "pt-PT"
    assert data.descriptions.brand_tone == "elegante e inspirador"
    assert "instagram.alt_text is missing (accessibility)" in result.warnings


def test_missing_identity_and_required_texts_are_errors() -> None:
    result = _validate({})

    assert result.valid is False
    assert result.errors == [
        "campaign.campaign_id is required",
        "look.image_url must be a valid URL",
        "descriptions.short is required",
        "descriptions.long is required",
        "instagram.caption is required",
    ]
    assert result.corrected_data.campaign.campaign_id == ""
    assert result.corrected_data.campaign.created_at == NOW.isoformat()
    assert result.corrected_data.product.name == "Fashion Item"


def test_never_raises_on_malformed_fields() -> None:
    campaign = _complete_campaign(
        look_items="not a list",
        palette_hex="#FFFFFF",
        seo_keywords={"a": 1},
        instagram=["caption"],
        governance="none",
        telemetry=[1, 2, 3],
        product=42,
        input="brief",
    )

    result = _validate(campaign)

    assert result.valid is False
    assert "instagram.caption is required" in result.errors
    assert result.corrected_data.look.items[0].role == "core"


def test_missing_descriptions_are_the_only_errors() -> None:
    result = _validate(_complete_campaign(short_description=None, long_description=None))

    assert result.valid is False
    assert result.errors == [
        "descriptions.short is required",
        "descriptions.long is required",
    ]


def test_numeric_campaign_id_counts_as_present() -> None:
    result = _validate(_complete_campaign(id=42))

    assert "campaign.campaign_id is required" not in result.errors
    assert result.valid is True
    assert result.corrected_data.campaign.campaign_id == "42"


def test_boolean_campaign_id_is_rejected() -> None:
    result = _validate(_complete_campaign(id=True))

    assert result.errors == ["campaign.campaign_id is required"]
    assert result.corrected_data.campaign.campaign_id == ""


def test_non_finite_look_image_duration_is_replaced_by_estimates() -> None:
    campaign = _complete_campaign(
        telemetry={"gen_durations_ms": {"look_image": float("nan")}},
    )

    result = _validate(campaign)

    telemetry = result.corrected_data.telemetry
    assert 3500 <= telemetry.gen_durations_ms.look_image < 5000
    assert "telemetry (generated estimates)" in result.validation_log.corrected_fields


def test_non_finite_telemetry_values_are_dropped() -> None:
    campaign = _complete_campaign(
        telemetry={
            "gen_durations_ms": {
                "look_image": 4100,
                "descriptions": float("inf"),
                "instagram": float("-inf"),
            },
            "output_lengths": {"caption_chars": float("nan")},
            "time_saved_minutes": float("nan"),
        },
    )

    result = _validate(campaign)

    telemetry = result.corrected_data.telemetry
    assert telemetry.gen_durations_ms.look_image == 4100
    assert telemetry.gen_durations_ms.descriptions is None
    assert telemetry.gen_durations_ms.instagram is None
    assert telemetry.output_lengths.caption_chars == len("Summer evenings in linen.")
    assert telemetry.time_saved_minutes is None


def test_non_finite_item_price_is_dropped() -> None:
    campaign = _complete_campaign(
        look_items=[
            {
                "role": "core",
                "name": "Linen Blazer",
                "price": {"value": float("inf"), "currency": "EUR"},
            },
        ],
    )

    result = _validate(campaign)

    price = result.corrected_data.look.items[0].price
    assert price is not None
    assert price.value is None
    assert price.currency == "EUR"


def test_invalid_palette_colors_are_dropped() -> None:
    result = _validate(_complete_campaign(palette_hex=["#FFFFFF", "red", "#12345"]))

    assert result.corrected_data.look.palette_hex == ["#FFFFFF"]
    assert "look.palette_hex (dropped invalid colors)" in result.validation_log.corrected_fields


def test_empty_palette_uses_fallback_when_product_has_colors() -> None:
    result = _validate(_complete_campaign(palette_hex=[]))

    assert result.corrected_data.look.palette_hex == ["#000000", "#FFFFFF", "#808080"]
    assert "look.palette_hex (generated from product colors)" in (
        result.validation_log.corrected_fields
    )


def test_hashtags_and_time_are_normalized() -> None:
    campaign = _complete_campaign(
        instagram={
            "caption": "Summer",
            "hashtags": ["linen", "summer style"],
            "call_to_action": "Shop now",
            "alt_text": "Alt",
            "suggested_post_time": "7:5",
        }
    )

    result = _validate(campaign)

    instagram = result.corrected_data.instagram
    assert instagram.hashtags == ["#linen", "#summerstyle"]
    assert instagram.suggested_post_time == "07:05"
    assert instagram.call_to_action == "Shop now"
    assert "instagram.hashtags (normalized)" in result.validation_log.corrected_fields
    assert "instagram.suggested_post_time (normalized to 24h)" in (
        result.validation_log.corrected_fields
    )


def test_hashtag_changes_of_equal_length_still_count_as_correction() -> None:
    campaign = _complete_campaign()
    campaign["instagram"] = {**campaign["instagram"], "hashtags": ["linen", "summer"]}

    result = _validate(campaign)

    assert "instagram.hashtags (normalized)" in result.validation_log.corrected_fields


def test_missing_seo_keywords_are_generated() -> None:
    result = _validate(_complete_campaign(seo_keywords=[]))

    keywords = result.corrected_data.descriptions.seo_keywords
    assert keywords[:2] == ["linen", "tailored"]
    assert "descriptions.seo_keywords (generated)" in result.validation_log.corrected_fields


def test_long_description_word_count_warning() -> None:
    result = _validate(_complete_campaign(long_description="Too short."))

    assert result.valid is True
    assert result.warnings == ["descriptions.long should be 100-200 words (current: 2)"]


def test_short_description_length_warning() -> None:
    result = _validate(_complete_campaign(short_description="x" * 201))

    assert result.valid is True
    assert result.warnings == ["descriptions.short exceeds 200 chars (201)"]


def test_invalid_asset_urls_become_none() -> None:
    result = _validate(_complete_campaign(centerpiece_image="blob:local", model_image=None))

    assets = result.corrected_data.input.assets
    assert assets.product_image_url is None
    assert assets.model_image_url is None


def test_missing_telemetry_is_synthesized_within_bounds_and_deterministic() -> None:
    campaign = _complete_campaign(telemetry=None)

    first = _validate(campaign, seed=3)
    second = _validate(campaign, seed=3)

    telemetry = first.corrected_data.telemetry
    assert telemetry == second.corrected_data.telemetry
    assert 3500 <= telemetry.gen_durations_ms.look_image < 5000
    assert 800 <= telemetry.gen_durations_ms.descriptions < 1200
    assert 600 <= telemetry.gen_durations_ms.instagram < 900
    assert 60 <= telemetry.time_saved_minutes < 120
    assert telemetry.output_lengths.desc_long_words == 120
    assert "telemetry (generated estimates)" in first.validation_log.corrected_fields


def test_missing_governance_is_initialized_with_low_risk() -> None:
    result = _validate(_complete_campaign(governance=None))

    governance = result.corrected_data.governance
    assert governance.brand_rules_applied.tone == "elegant and inspiring"
    assert governance.safety_checks.hallucination_risk == "low"
    assert "governance (initialized)" in result.validation_log.corrected_fields


def test_stored_locale_wins_over_language_tag() -> None:
    result = _validate(_complete_campaign(locale="es-ES", brand_tone=None))

    assert result.corrected_data.campaign.locale == "es-ES"
    assert result.corrected_data.descriptions.brand_tone == "elegante e inspirador"


def test_corrected_output_is_a_fixed_point() -> None:
    campaign = {
        "id": "camp-3",
        "title": "Silk Scarf",
        "look_visual": "https://cdn.example.com/scarf.png",
        "short_description": "Printed silk scarf.",
        "long_description": "A printed silk scarf for every season.",
        "instagram": {"caption": "Silk moments", "hashtags": ["silk"], "suggestedTime": "9"},
        "brand_tone": "Modern",
        "product": {"colors": ["red"]},
    }

    first = _validate(campaign)
    assert first.corrected is True

    second = _validate(lookpost_to_campaign_record(first.corrected_data), seed=99)

    assert second.corrected is False
    assert second.validation_log.corrected_fields == []
    assert second.corrected_data == first.corrected_data


def test_corrected_campaign_updates_contains_only_write_back_columns() -> None:
    result = _validate(_complete_campaign(palette_hex=[], telemetry=None))

    updates = corrected_campaign_updates(result)

    assert set(updates) == {
        "look_items",
        "palette_hex",
        "seo_keywords",
        "brand_tone",
        "governance",
        "telemetry",
    }
    assert updates["palette_hex"] == ["#000000", "#FFFFFF", "#808080"]
    assert updates["look_items"][0]["role"] == "core"
