"""Custom exception classes for the application."""

from typing import Any


class LookPostError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Campaign Errors
class CampaignNotFoundError(LookPostError):
    """Campaign not found."""

    def __init__(self, campaign_id: str) -> None:
        super().__init__(f"Campaign not found: {campaign_id}")


# Filter Errors
class InvalidFilterStateError(LookPostError):
    """Filter state breaks its range invariants."""

    def __init__(self, message: str = "Invalid filter state") -> None:
        super().__init__(message)
