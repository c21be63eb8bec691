"""Constants for campaign routes."""

CAMPAIGN_NOT_FOUND_DETAIL = "Campaign not found"
EXPORT_FALLBACK_ID = "draft"
