"""LookPost export schema and validation result schemas."""

from typing import Literal

from pydantic import BaseModel, Field

Locale = Literal["pt-PT", "pt-BR", "en-US", "es-ES"]
ItemRole = Literal["core", "accessory", "footwear", "bag", "jewelry", "other"]
RiskLevel = Literal["low", "medium", "high"]


class ItemPrice(BaseModel):
    """Optional price attached to a look item."""

    value: float | None = None
    currency: str | None = None


class LookPostItem(BaseModel):
    """One garment or accessory in a look."""

    role: ItemRole
    name: str
    sku: str | None = None
    hex_colors: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    price: ItemPrice | None = None


class CampaignInfo(BaseModel):
    campaign_id: str
    created_at: str
    locale: Locale
    source_app: str
    source_version: str


class InputAssets(BaseModel):
    product_image_url: str | None = None
    model_image_url: str | None = None


class CampaignInput(BaseModel):
    """Creative brief the look was generated from."""

    brief: str
    occasion: str | None = None
    vibe: str | None = None
    audience: str | None = None
    budget_hint: str | None = None
    assets: InputAssets = Field(default_factory=InputAssets)


class ProductInfo(BaseModel):
    name: str
    sku: str | None = None
    material: str | None = None
    fit: str | None = None
    style: str
    colors: list[str] = Field(default_factory=list)
    size_notes: str | None = None


class LookInfo(BaseModel):
    image_url: str
    items: list[LookPostItem] = Field(default_factory=list)
    palette_hex: list[str] = Field(default_factory=list)


class Descriptions(BaseModel):
    short: str
    long: str
    seo_keywords: list[str] = Field(default_factory=list)
    brand_tone: str


class InstagramPost(BaseModel):
    caption: str
    hashtags: list[str] = Field(default_factory=list)
    call_to_action: str
    alt_text: str
    suggested_post_time: str


class BrandRulesApplied(BaseModel):
    tone: str
    forbidden_terms_found: list[str] = Field(default_factory=list)
    required_terms_present: list[str] = Field(default_factory=list)


class SafetyChecks(BaseModel):
    hallucination_risk: RiskLevel = "low"
    nsfw_risk: RiskLevel = "low"


class Governance(BaseModel):
    """Record of the brand rules and safety checks applied to a campaign."""

    brand_rules_applied: BrandRulesApplied
    safety_checks: SafetyChecks = Field(default_factory=SafetyChecks)


class GenerationDurations(BaseModel):
    look_image: int | None = None
    descriptions: int | None = None
    instagram: int | None = None


class OutputLengths(BaseModel):
    desc_short_chars: int = 0
    desc_long_words: int = 0
    caption_chars: int = 0


class Telemetry(BaseModel):
    gen_durations_ms: GenerationDurations = Field(default_factory=GenerationDurations)
    output_lengths: OutputLengths = Field(default_factory=OutputLengths)
    time_saved_minutes: int | None = None


class LookPostSchema(BaseModel):
    """Canonical, fully populated campaign document (schema 1.0.0)."""

    schema_version: str
    campaign: CampaignInfo
    input: CampaignInput
    product: ProductInfo
    look: LookInfo
    descriptions: Descriptions
    instagram: InstagramPost
    governance: Governance
    telemetry: Telemetry


class ValidationLog(BaseModel):
    timestamp: str
    corrected_fields: list[str] = Field(default_factory=list)
    duration_ms: int = 0


class ValidationResult(BaseModel):
    """Outcome of one validation/normalization run.

    `valid` is False when any hard error was found. `corrected_data` is always
    populated; callers must check `valid` before trusting required fields such
    as `look.image_url`.
    """

    model_config = {"frozen": True}

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    corrected: bool = False
    corrected_data: LookPostSchema
    validation_log: ValidationLog
