"""Validation and auto-correction of stored campaigns into the LookPost schema.

The validator never raises on malformed campaigns. Missing required content
becomes an entry in `errors`, advisory problems become `warnings`, and every
field it had to repair is listed in the validation log.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from app.schemas.lookpost import (
    CampaignInfo,
    Descriptions,
    InstagramPost,
    LookInfo,
    LookPostSchema,
    OutputLengths,
    ValidationLog,
    ValidationResult,
)
from app.services.lookpost.constants import (
    APP_VERSION,
    BRIEF_TEMPLATE,
    DEFAULT_BRIEF_SUBJECT,
    DEFAULT_CALL_TO_ACTION,
    DEFAULT_LOCALE,
    FALLBACK_PALETTE,
    LONG_DESCRIPTION_MAX_WORDS,
    LONG_DESCRIPTION_MIN_WORDS,
    SCHEMA_VERSION,
    SHORT_DESCRIPTION_MAX_CHARS,
    SOURCE_APP,
)
from app.services.lookpost.fields import (
    as_dict,
    as_identifier,
    as_str_list,
    as_text,
    campaign_brief,
    campaign_locale,
    campaign_product,
    instagram_alt_text,
    instagram_call_to_action,
    instagram_caption,
    instagram_hashtags,
    instagram_suggested_time,
)
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
from app.services.lookpost.sections import (
    build_campaign_input,
    coerce_governance,
    coerce_look_items,
    coerce_product,
    coerce_telemetry,
    core_item,
    has_core_item,
    has_measured_telemetry,
    synthesize_telemetry,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Findings:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    corrected_fields: list[str] = field(default_factory=list)

    def correct(self, descriptor: str) -> None:
        self.corrected_fields.append(descriptor)

    @property
    def corrected(self) -> bool:
        return bool(self.corrected_fields)


def validate_and_normalize_campaign(
    raw: Mapping[str, Any],
    *,
    language: str | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> ValidationResult:
    """Validate a stored campaign and build its corrected LookPost document.

    `language` is the UI language tag used when the campaign has no locale of
    its own. `rng` drives placeholder telemetry and `now` fixes the clock, so
    callers and tests can make a run fully deterministic.
    """
    started = time.perf_counter()
    rng = rng or random.Random()
    moment = now or datetime.now(timezone.utc)
    findings = _Findings()

    locale = campaign_locale(raw) or detect_locale(language)
    title = as_text(raw.get("title"))

    # 1. Identity
    campaign_id = as_identifier(raw.get("id"))
    if campaign_id is None:
        findings.errors.append("campaign.campaign_id is required")

    campaign_info = CampaignInfo(
        campaign_id=campaign_id or "",
        created_at=as_text(raw.get("created_at")) or moment.isoformat(),
        locale=locale,
        source_app=SOURCE_APP,
        source_version=APP_VERSION,
    )

    # 2. Input
    brief = campaign_brief(raw)
    if brief is None:
        brief = BRIEF_TEMPLATE.format(subject=title or DEFAULT_BRIEF_SUBJECT)
        findings.correct("input.brief (generated from title)")
    campaign_input = build_campaign_input(raw, brief)

    # 3. Product
    product_source = campaign_product(raw)
    if as_text(product_source.get("name")) is None:
        findings.correct("product.name (inferred from title)")
    product = coerce_product(product_source, title=title)

    # 4. Look
    look_visual = raw.get("look_visual")
    if not validate_url(look_visual):
        findings.errors.append("look.image_url must be a valid URL")

    items = coerce_look_items(raw.get("look_items"))
    if not has_core_item(items):
        items.insert(0, core_item(product))
        findings.correct("look.items (added core item)")

    stored_palette = as_str_list(raw.get("palette_hex"))
    palette = [color for color in stored_palette if validate_hex_color(color)]
    if len(palette) != len(stored_palette):
        findings.correct("look.palette_hex (dropped invalid colors)")
    if not palette and product.colors:
        palette = list(FALLBACK_PALETTE)
        findings.correct("look.palette_hex (generated from product colors)")

    look = LookInfo(
        image_url=look_visual if isinstance(look_visual, str) else "",
        items=items,
        palette_hex=palette,
    )

    # 5. Descriptions
    short_description = as_text(raw.get("short_description"))
    long_description = as_text(raw.get("long_description"))
    caption = instagram_caption(raw)

    if short_description is None:
        findings.errors.append("descriptions.short is required")
    elif len(short_description) > SHORT_DESCRIPTION_MAX_CHARS:
        findings.warnings.append(
            f"descriptions.short exceeds {SHORT_DESCRIPTION_MAX_CHARS} chars "
            f"({len(short_description)})"
        )

    long_words = count_words(long_description)
    if long_description is None:
        findings.errors.append("descriptions.long is required")
    elif not LONG_DESCRIPTION_MIN_WORDS <= long_words <= LONG_DESCRIPTION_MAX_WORDS:
        findings.warnings.append(
            f"descriptions.long should be {LONG_DESCRIPTION_MIN_WORDS}-"
            f"{LONG_DESCRIPTION_MAX_WORDS} words (current: {long_words})"
        )

    seo_keywords = as_str_list(raw.get("seo_keywords"))
    if not seo_keywords:
        source_text = " ".join(
            part for part in (short_description, long_description, caption) if part
        )
        seo_keywords = generate_seo_keywords(source_text)
        if seo_keywords:
            findings.correct("descriptions.seo_keywords (generated)")

    stored_tone = raw.get("brand_tone")
    brand_tone = normalize_brand_tone(stored_tone, locale)
    if brand_tone != stored_tone:
        findings.correct("descriptions.brand_tone (normalized)")

    descriptions = Descriptions(
        short=short_description or "",
        long=long_description or "",
        seo_keywords=seo_keywords,
        brand_tone=brand_tone,
    )

    # 6. Instagram
    if caption is None:
        findings.errors.append("instagram.caption is required")

    alt_text = instagram_alt_text(raw)
    if alt_text is None:
        findings.warnings.append("instagram.alt_text is missing (accessibility)")

    stored_hashtags = instagram_hashtags(raw)
    hashtags = normalize_hashtags(stored_hashtags)
    if hashtags != stored_hashtags:
        findings.correct("instagram.hashtags (normalized)")

    stored_time = instagram_suggested_time(raw)
    suggested_time = normalize_time(stored_time)
    if suggested_time != stored_time:
        findings.correct("instagram.suggested_post_time (normalized to 24h)")

    call_to_action = instagram_call_to_action(raw)
    if call_to_action is None:
        call_to_action = DEFAULT_CALL_TO_ACTION.get(locale, DEFAULT_CALL_TO_ACTION[DEFAULT_LOCALE])
        findings.correct("instagram.call_to_action (added default)")

    instagram = InstagramPost(
        caption=caption or "",
        hashtags=hashtags,
        call_to_action=call_to_action,
        alt_text=alt_text or "",
        suggested_post_time=suggested_time,
    )

    # 7. Governance
    stored_governance = raw.get("governance")
    if not isinstance(stored_governance, Mapping) or not stored_governance:
        findings.correct("governance (initialized)")
    governance = coerce_governance(as_dict(stored_governance), tone=brand_tone)

    # 8. Telemetry
    lengths = OutputLengths(
        desc_short_chars=len(short_description or ""),
        desc_long_words=long_words,
        caption_chars=len(caption or ""),
    )
    stored_telemetry = raw.get("telemetry")
    if has_measured_telemetry(stored_telemetry):
        telemetry = coerce_telemetry(as_dict(stored_telemetry), lengths=lengths)
    else:
        telemetry = synthesize_telemetry(rng, lengths=lengths)
        findings.correct("telemetry (generated estimates)")

    corrected_data = LookPostSchema(
        schema_version=SCHEMA_VERSION,
        campaign=campaign_info,
        input=campaign_input,
        product=product,
        look=look,
        descriptions=descriptions,
        instagram=instagram,
        governance=governance,
        telemetry=telemetry,
    )

    duration_ms = round((time.perf_counter() - started) * 1000)
    result = ValidationResult(
        valid=not findings.errors,
        errors=findings.errors,
        warnings=findings.warnings,
        corrected=findings.corrected,
        corrected_data=corrected_data,
        validation_log=ValidationLog(
            timestamp=moment.isoformat(),
            corrected_fields=findings.corrected_fields,
            duration_ms=duration_ms,
        ),
    )

    logger.debug(
        "Campaign validated",
        extra={
            "campaign_id": campaign_id,
            "valid": result.valid,
            "error_count": len(result.errors),
            "corrected_count": len(findings.corrected_fields),
            "duration_ms": duration_ms,
        },
    )
    return result


def lookpost_to_campaign_record(schema: LookPostSchema) -> dict[str, Any]:
    """Map a LookPost document back onto stored campaign field names.

    Validating the returned record again reports no corrections.
    """
    data = schema.model_dump(mode="json")
    return {
        "id": data["campaign"]["campaign_id"],
        "created_at": data["campaign"]["created_at"],
        "locale": data["campaign"]["locale"],
        "prompt": data["input"]["brief"],
        "input": {
            key: value for key, value in data["input"].items() if key != "assets"
        },
        "centerpiece_image": data["input"]["assets"]["product_image_url"],
        "model_image": data["input"]["assets"]["model_image_url"],
        "product": data["product"],
        "look_visual": data["look"]["image_url"],
        "look_items": data["look"]["items"],
        "palette_hex": data["look"]["palette_hex"],
        "short_description": data["descriptions"]["short"],
        "long_description": data["descriptions"]["long"],
        "seo_keywords": data["descriptions"]["seo_keywords"],
        "brand_tone": data["descriptions"]["brand_tone"],
        "instagram": {
            "caption": data["instagram"]["caption"],
            "hashtags": data["instagram"]["hashtags"],
            "callToAction": data["instagram"]["call_to_action"],
            "altText": data["instagram"]["alt_text"],
            "suggestedTime": data["instagram"]["suggested_post_time"],
        },
        "governance": data["governance"],
        "telemetry": data["telemetry"],
    }


def corrected_campaign_updates(result: ValidationResult) -> dict[str, Any]:
    """Return the stored-campaign columns written back after a corrected run."""
    data = result.corrected_data.model_dump(mode="json")
    return {
        "look_items": data["look"]["items"],
        "palette_hex": data["look"]["palette_hex"],
        "seo_keywords": data["descriptions"]["seo_keywords"],
        "brand_tone": data["descriptions"]["brand_tone"] or None,
        "governance": data["governance"],
        "telemetry": data["telemetry"],
    }
