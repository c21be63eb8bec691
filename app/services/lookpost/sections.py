"""Section builders shared by the LookPost validator and the export builder."""

from __future__ import annotations

import math
import random
from collections.abc import Mapping
from typing import Any

from app.schemas.lookpost import (
    BrandRulesApplied,
    CampaignInput,
    GenerationDurations,
    Governance,
    InputAssets,
    ItemPrice,
    LookPostItem,
    OutputLengths,
    ProductInfo,
    SafetyChecks,
    Telemetry,
)
from app.services.lookpost.constants import (
    CORE_ROLE,
    DEFAULT_PRODUCT_NAME,
    DEFAULT_PRODUCT_STYLE,
    DEFAULT_RISK_LEVEL,
    ITEM_ROLES,
    RISK_LEVELS,
    TELEMETRY_DESCRIPTIONS_MS,
    TELEMETRY_INSTAGRAM_MS,
    TELEMETRY_LOOK_IMAGE_MS,
    TELEMETRY_TIME_SAVED_MINUTES,
)
from app.services.lookpost.fields import (
    as_dict,
    as_int,
    as_list,
    as_str_list,
    as_text,
    campaign_input,
)
from app.services.lookpost.normalizers import validate_url


def build_campaign_input(raw: Mapping[str, Any], brief: str) -> CampaignInput:
    """Build the input section; asset URLs that fail validation become None."""
    source = campaign_input(raw)
    product_image = raw.get("centerpiece_image")
    model_image = raw.get("model_image")

    return CampaignInput(
        brief=brief,
        occasion=as_text(source.get("occasion")),
        vibe=as_text(source.get("vibe")),
        audience=as_text(source.get("audience")),
        budget_hint=as_text(source.get("budget_hint")),
        assets=InputAssets(
            product_image_url=product_image if validate_url(product_image) else None,
            model_image_url=model_image if validate_url(model_image) else None,
        ),
    )


def coerce_product(product: Mapping[str, Any], *, title: str | None) -> ProductInfo:
    return ProductInfo(
        name=as_text(product.get("name")) or title or DEFAULT_PRODUCT_NAME,
        sku=as_text(product.get("sku")),
        material=as_text(product.get("material")),
        fit=as_text(product.get("fit")),
        style=as_text(product.get("style")) or DEFAULT_PRODUCT_STYLE,
        colors=as_str_list(product.get("colors")),
        size_notes=as_text(product.get("size_notes")),
    )


def coerce_look_items(value: Any) -> list[LookPostItem]:
    """Parse stored look items, skipping entries that are not objects."""
    items: list[LookPostItem] = []
    for entry in as_list(value):
        if not isinstance(entry, Mapping):
            continue
        role = entry.get("role")
        price = entry.get("price")
        items.append(
            LookPostItem(
                role=role if role in ITEM_ROLES else "other",
                name=as_text(entry.get("name")) or "",
                sku=as_text(entry.get("sku")),
                hex_colors=as_str_list(entry.get("hex_colors")),
                tags=as_str_list(entry.get("tags")),
                price=_coerce_price(price) if isinstance(price, Mapping) else None,
            )
        )
    return items


def core_item(product: ProductInfo) -> LookPostItem:
    return LookPostItem(role=CORE_ROLE, name=product.name, sku=product.sku)


def has_core_item(items: list[LookPostItem]) -> bool:
    return any(item.role == CORE_ROLE for item in items)


def coerce_governance(value: Mapping[str, Any], *, tone: str) -> Governance:
    """Parse a governance object, filling missing sub-fields with defaults."""
    rules = as_dict(value.get("brand_rules_applied"))
    safety = as_dict(value.get("safety_checks"))
    return Governance(
        brand_rules_applied=BrandRulesApplied(
            tone=as_text(rules.get("tone")) or tone,
            forbidden_terms_found=as_str_list(rules.get("forbidden_terms_found")),
            required_terms_present=as_str_list(rules.get("required_terms_present")),
        ),
        safety_checks=SafetyChecks(
            hallucination_risk=_risk_level(safety.get("hallucination_risk")),
            nsfw_risk=_risk_level(safety.get("nsfw_risk")),
        ),
    )


def has_measured_telemetry(value: Any) -> bool:
    """True when stored telemetry carries a non-zero look image duration."""
    durations = as_dict(as_dict(value).get("gen_durations_ms"))
    return bool(as_int(durations.get("look_image")))


def coerce_telemetry(value: Mapping[str, Any], *, lengths: OutputLengths) -> Telemetry:
    durations = as_dict(value.get("gen_durations_ms"))
    stored_lengths = as_dict(value.get("output_lengths"))
    return Telemetry(
        gen_durations_ms=GenerationDurations(
            look_image=as_int(durations.get("look_image")),
            descriptions=as_int(durations.get("descriptions")),
            instagram=as_int(durations.get("instagram")),
        ),
        output_lengths=OutputLengths(
            desc_short_chars=_int_or(stored_lengths.get("desc_short_chars"), lengths.desc_short_chars),
            desc_long_words=_int_or(stored_lengths.get("desc_long_words"), lengths.desc_long_words),
            caption_chars=_int_or(stored_lengths.get("caption_chars"), lengths.caption_chars),
        ),
        time_saved_minutes=as_int(value.get("time_saved_minutes")),
    )


def synthesize_telemetry(rng: random.Random, *, lengths: OutputLengths) -> Telemetry:
    """Build placeholder telemetry with bounded random durations.

    These numbers are estimates for campaigns generated before telemetry was
    recorded; they are not measurements.
    """
    return Telemetry(
        gen_durations_ms=GenerationDurations(
            look_image=_bounded(rng, TELEMETRY_LOOK_IMAGE_MS),
            descriptions=_bounded(rng, TELEMETRY_DESCRIPTIONS_MS),
            instagram=_bounded(rng, TELEMETRY_INSTAGRAM_MS),
        ),
        output_lengths=lengths,
        time_saved_minutes=_bounded(rng, TELEMETRY_TIME_SAVED_MINUTES),
    )


def _bounded(rng: random.Random, bounds: tuple[int, int]) -> int:
    low, span = bounds
    return int(low + rng.random() * span)


def _int_or(value: Any, default: int) -> int:
    parsed = as_int(value)
    return parsed if parsed is not None else default


def _risk_level(value: Any) -> str:
    return value if value in RISK_LEVELS else DEFAULT_RISK_LEVEL


def _coerce_price(value: Mapping[str, Any]) -> ItemPrice:
    amount = value.get("value")
    if isinstance(amount, bool) or not isinstance(amount, int | float) or not math.isfinite(amount):
        amount = None
    return ItemPrice(value=amount, currency=as_text(value.get("currency")))
