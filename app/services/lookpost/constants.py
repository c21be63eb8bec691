"""Fallback values and limits shared by the LookPost validator and builder."""

from __future__ import annotations

SCHEMA_VERSION = "1.0.0"
SOURCE_APP = "Do Look ao Post"
APP_VERSION = "0.3.1"

SUPPORTED_LOCALES: tuple[str, ...] = ("pt-PT", "pt-BR", "en-US", "es-ES")
DEFAULT_LOCALE = "pt-PT"
DEFAULT_LANGUAGE_TAG = "pt"

DEFAULT_BRIEF_SUBJECT = "fashion piece"
BRIEF_TEMPLATE = "Look featuring {subject}"
DEFAULT_PRODUCT_NAME = "Fashion Item"
DEFAULT_PRODUCT_STYLE = "Casual"
DEFAULT_ACCESSORY_NAME = "Accessory {index}"

# Placeholder palette; real color extraction from the look image is not done.
FALLBACK_PALETTE: tuple[str, ...] = ("#000000", "#FFFFFF", "#808080")

DEFAULT_POST_TIME = "19:00"

DEFAULT_CALL_TO_ACTION: dict[str, str] = {
    "en-US": "Discover more looks on our website ✨",
    "pt-PT": "Descubra mais looks em nosso site ✨",
    "pt-BR": "Descubra mais looks em nosso site ✨",
    "es-ES": "Descubre más looks en nuestra web ✨",
}

# Ordered: the first key contained in the tone wins.
BRAND_TONE_TABLE: tuple[tuple[str, dict[str, str]], ...] = (
    (
        "elegant",
        {
            "en-US": "elegant and inspiring",
            "pt-PT": "elegante e inspirador",
            "pt-BR": "elegante e inspirador",
            "es-ES": "elegante e inspirador",
        },
    ),
    (
        "modern",
        {
            "en-US": "modern and bold",
            "pt-PT": "moderno e ousado",
            "pt-BR": "moderno e ousado",
            "es-ES": "moderno y audaz",
        },
    ),
    (
        "casual",
        {
            "en-US": "casual chic",
            "pt-PT": "casual chic",
            "pt-BR": "casual chic",
            "es-ES": "casual chic",
        },
    ),
)
DEFAULT_BRAND_TONE_KEY = "elegant"

RISK_LEVELS: tuple[str, ...] = ("low", "medium", "high")
DEFAULT_RISK_LEVEL = "low"

ITEM_ROLES: tuple[str, ...] = ("core", "accessory", "footwear", "bag", "jewelry", "other")
CORE_ROLE = "core"

SHORT_DESCRIPTION_MAX_CHARS = 200
LONG_DESCRIPTION_MIN_WORDS = 100
LONG_DESCRIPTION_MAX_WORDS = 200

SEO_KEYWORD_LIMIT = 8
SEO_KEYWORD_MIN_LENGTH = 4

# Synthetic telemetry bounds: (low, span) in milliseconds/minutes.
TELEMETRY_LOOK_IMAGE_MS = (3500, 1500)
TELEMETRY_DESCRIPTIONS_MS = (800, 400)
TELEMETRY_INSTAGRAM_MS = (600, 300)
TELEMETRY_TIME_SAVED_MINUTES = (60, 60)
