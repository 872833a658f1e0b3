"""Client for the upstream market news feed."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

# Keys the upstream API uses for rate-limit and error notices instead of a feed.
_NOTICE_KEYS = ("Information", "Note", "Error Message")


class FeedError(RuntimeError):
    """Upstream fetch or decode failure."""


def build_feed_params(settings) -> Dict[str, str]:
    return {
        "function": settings.news_function,
        "topics": settings.news_topics,
        "apikey": settings.alpha_vantage_api_key,
    }


def _decode(response: httpx.Response) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise FeedError(f"Feed response is not valid JSON: {exc}") from exc
    return payload if isinstance(payload, dict) else {}


async def fetch_feed(
    settings, client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """
    GET the feed once and return the decoded JSON object.

    Network errors, non-2xx responses and non-JSON bodies raise FeedError.
    A JSON body that is not an object decodes to an empty dict.
    """
    params = build_feed_params(settings)
    try:
        if client is None:
            async with httpx.AsyncClient(
                timeout=settings.request_timeout_seconds
            ) as owned:
                response = await owned.get(settings.news_api_url, params=params)
        else:
            response = await client.get(settings.news_api_url, params=params)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FeedError(f"Feed request failed: {exc}") from exc

    payload = _decode(response)
    logger.info("Fetched news feed (%d bytes)", len(response.content))
    return payload


def extract_feed_items(payload: Any) -> List[Any]:
    """Return the `feed` array, or an empty list when it is missing or malformed."""
    if not isinstance(payload, dict):
        return []
    items = payload.get("feed")
    if isinstance(items, list):
        return items
    for key in _NOTICE_KEYS:
        if payload.get(key):
            logger.warning("Upstream feed returned a notice (%s): %s", key, payload[key])
            break
    return []


def load_feed_file(path: Path | str) -> Dict[str, Any]:
    """Read a saved feed payload from disk for offline builds."""
    feed_path = Path(path)
    try:
        payload = json.loads(feed_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FeedError(f"Could not read feed file {feed_path}: {exc}") from exc
    return payload if isinstance(payload, dict) else {}
