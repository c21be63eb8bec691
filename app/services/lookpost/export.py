"""Serialization helpers for downloadable LookPost exports."""

from __future__ import annotations

import json
import re
from datetime import datetime
from urllib.parse import quote

from app.schemas.lookpost import LookPostSchema

EXPORT_MEDIA_TYPE = "application/json"

_UNSAFE_FILENAME_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


def serialize_lookpost(schema: LookPostSchema) -> str:
    """Render the document as 2-space indented JSON, keeping non-ASCII text."""
    return json.dumps(schema.model_dump(mode="json"), indent=2, ensure_ascii=False)


def export_filename(campaign_id: str, at: datetime) -> str:
    """Return `campaign-{id}-{yyyyMMdd-HHmm}.json`."""
    return f"campaign-{campaign_id}-{at.strftime('%Y%m%d-%H%M')}.json"


def attachment_disposition(filename: str) -> str:
    """Build a `Content-Disposition` value that survives any campaign id.

    The plain `filename` parameter is restricted to ASCII letters, digits and
    `._-`; the exact name travels in the RFC 5987 `filename*` parameter.
    """
    ascii_name = _UNSAFE_FILENAME_CHARS_RE.sub("_", filename)
    encoded_name = quote(filename, safe="")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{encoded_name}"
