"""Constants for filter routes."""

INVALID_FILTER_STATE_DETAIL = "Invalid filter state"
