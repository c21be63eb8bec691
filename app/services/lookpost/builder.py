"""Build a LookPost document from a stored campaign without correcting it."""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any

from app.schemas.lookpost import (
    CampaignInfo,
    Descriptions,
    InstagramPost,
    LookInfo,
    LookPostItem,
    LookPostSchema,
    OutputLengths,
    ProductInfo,
)
from app.services.lookpost.constants import (
    APP_VERSION,
    BRIEF_TEMPLATE,
    CORE_ROLE,
    DEFAULT_ACCESSORY_NAME,
    DEFAULT_BRIEF_SUBJECT,
    DEFAULT_CALL_TO_ACTION,
    DEFAULT_LOCALE,
    DEFAULT_POST_TIME,
    DEFAULT_PRODUCT_NAME,
    SCHEMA_VERSION,
    SOURCE_APP,
)
from app.services.lookpost.fields import (
    as_dict,
    as_identifier,
    as_list,
    as_str_list,
    as_text,
    campaign_brief,
    campaign_locale,
    campaign_product,
    image_analysis,
    instagram_alt_text,
    instagram_call_to_action,
    instagram_caption,
    instagram_hashtags,
    instagram_suggested_time,
)
from app.services.lookpost.normalizers import count_words, detect_locale, normalize_brand_tone
from app.services.lookpost.sections import (
    build_campaign_input,
    coerce_governance,
    coerce_look_items,
    coerce_product,
    coerce_telemetry,
    has_measured_telemetry,
    synthesize_telemetry,
)


def build_lookpost_json(
    raw: Mapping[str, Any],
    *,
    language: str | None = None,
    rng: random.Random | None = None,
) -> LookPostSchema:
    """Assemble the LookPost export document for a campaign as stored.

    Missing fields fall back to the same values the validator uses, but
    nothing is normalized or recorded: this is a straight export, not a
    validation pass.
    """
    rng = rng or random.Random()
    locale = campaign_locale(raw) or detect_locale(language)
    title = as_text(raw.get("title"))

    brief = campaign_brief(raw) or BRIEF_TEMPLATE.format(
        subject=title or DEFAULT_BRIEF_SUBJECT
    )

    stored_product = campaign_product(raw)
    product = (
        coerce_product(stored_product, title=title)
        if stored_product
        else _infer_product(raw, title=title)
    )

    look_visual = raw.get("look_visual")
    stored_items = raw.get("look_items")
    items = (
        coerce_look_items(stored_items)
        if isinstance(stored_items, list)
        else _infer_look_items(raw, title=title)
    )

    short_description = as_text(raw.get("short_description")) or ""
    long_description = as_text(raw.get("long_description")) or ""
    caption = instagram_caption(raw) or ""
    stored_tone = as_text(raw.get("brand_tone"))
    brand_tone = stored_tone or normalize_brand_tone(None, locale)

    lengths = OutputLengths(
        desc_short_chars=len(short_description),
        desc_long_words=count_words(long_description),
        caption_chars=len(caption),
    )
    stored_telemetry = raw.get("telemetry")
    telemetry = (
        coerce_telemetry(as_dict(stored_telemetry), lengths=lengths)
        if has_measured_telemetry(stored_telemetry)
        else synthesize_telemetry(rng, lengths=lengths)
    )

    return LookPostSchema(
        schema_version=SCHEMA_VERSION,
        campaign=CampaignInfo(
            campaign_id=as_identifier(raw.get("id")) or "",
            created_at=as_text(raw.get("created_at")) or "",
            locale=locale,
            source_app=SOURCE_APP,
            source_version=as_text(raw.get("source_version")) or APP_VERSION,
        ),
        input=build_campaign_input(raw, brief),
        product=product,
        look=LookInfo(
            image_url=look_visual if isinstance(look_visual, str) else "",
            items=items,
            palette_hex=as_str_list(raw.get("palette_hex")),
        ),
        descriptions=Descriptions(
            short=short_description,
            long=long_description,
            seo_keywords=as_str_list(raw.get("seo_keywords")),
            brand_tone=brand_tone,
        ),
        instagram=InstagramPost(
            caption=caption,
            hashtags=as_str_list(instagram_hashtags(raw)),
            call_to_action=instagram_call_to_action(raw)
            or DEFAULT_CALL_TO_ACTION.get(locale, DEFAULT_CALL_TO_ACTION[DEFAULT_LOCALE]),
            alt_text=instagram_alt_text(raw) or "",
            suggested_post_time=instagram_suggested_time(raw) or DEFAULT_POST_TIME,
        ),
        governance=coerce_governance(as_dict(raw.get("governance")), tone=brand_tone),
        telemetry=telemetry,
    )


def _infer_product(raw: Mapping[str, Any], *, title: str | None) -> ProductInfo:
    """Infer product data from the image analysis when no product was stored."""
    analysis = image_analysis(raw)
    colors_text = as_text(analysis.get("colors"))
    colors = (
        [color.strip() for color in colors_text.split(",") if color.strip()]
        if colors_text
        else []
    )
    inferred = {
        "name": title or DEFAULT_PRODUCT_NAME,
        "style": as_text(analysis.get("styleAesthetic")),
        "colors": colors,
    }
    return coerce_product(inferred, title=title)


def _infer_look_items(raw: Mapping[str, Any], *, title: str | None) -> list[LookPostItem]:
    """One core item for the centerpiece plus one accessory item per accessory image."""
    items = [LookPostItem(role=CORE_ROLE, name=title or DEFAULT_PRODUCT_NAME)]
    for index, _image in enumerate(as_list(raw.get("accessories_images")), start=1):
        items.append(
            LookPostItem(role="accessory", name=DEFAULT_ACCESSORY_NAME.format(index=index))
        )
    return items
