"""Map raw upstream feed records onto the internal Article model.

The normalizer is deliberately permissive: every field degrades to a default,
so one malformed record never takes the rest of the batch down with it.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Mapping, Optional

from .models import Article, ArticleSource

UNKNOWN_SOURCE = "Unknown Source"
DEFAULT_PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"

# Compact upstream timestamp, e.g. 20240115T093000.
_COMPACT_TS_PATTERN = re.compile(r"^[0-9]{8}T[0-9]{6}$")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def current_timestamp(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now()
    return moment.replace(microsecond=0).isoformat()


def format_published_at(raw: Any, now: Optional[datetime] = None) -> str:
    """
    Reformat a compact 'YYYYMMDDTHHMMSS' value as 'YYYY-MM-DDTHH:MM:SS'.

    Missing or unrecognized values fall back to the current wall-clock time.
    No timezone is attached in either case.
    """
    value = raw.strip() if isinstance(raw, str) else ""
    if not _COMPACT_TS_PATTERN.match(value):
        return current_timestamp(now)
    return (
        f"{value[0:4]}-{value[4:6]}-{value[6:8]}"
        f"T{value[9:11]}:{value[11:13]}:{value[13:15]}"
    )


def normalize_source(raw: Any) -> str:
    """Accept either a plain source string or an object with a `name` field."""
    if isinstance(raw, Mapping):
        raw = raw.get("name")
    if isinstance(raw, str) and raw.strip():
        return raw
    return UNKNOWN_SOURCE


def normalize_feed_item(
    raw: Any,
    *,
    placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE,
    now: Optional[datetime] = None,
) -> Article:
    """Build an Article from one feed record without raising on bad input."""
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    image = _first_present(data, "banner_image", "urlToImage")
    return Article(
        title=_text(data.get("title")),
        description=_text(_first_present(data, "summary", "description")),
        url=_text(data.get("url")),
        url_to_image=_text(image) if image else placeholder_image,
        published_at=format_published_at(data.get("time_published"), now=now),
        source=ArticleSource(name=normalize_source(data.get("source"))),
    )
