"""Page preparation: fetch -> normalize -> classify -> generate -> summarize.

Per-article work is independent, so articles can be prepared sequentially or
on a thread pool with identical output. Upstream failures never escape
`build_news_page`; they degrade to an empty page with a fixed message.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx
from markupsafe import Markup

from .config import Settings, get_settings
from .content import ContentGenerator, build_content_generator
from .feed import FeedError, extract_feed_items, fetch_feed
from .models import Article, NewsPage
from .normalizer import DEFAULT_PLACEHOLDER_IMAGE, normalize_feed_item
from .sentiment import Lexicon, badge_color, classify_sentiment, resolve_lexicon

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Could not fetch top stories."
SUMMARY_SEPARATOR = "<br/>"


def prepare_article(
    raw: Any,
    *,
    generator: Optional[ContentGenerator] = None,
    lexicon: Optional[Lexicon] = None,
    placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE,
) -> Article:
    """Normalize one feed record and attach its sentiment and generated content."""
    article = normalize_feed_item(raw, placeholder_image=placeholder_image)
    updates: Dict[str, Any] = {
        "sentiment": classify_sentiment(article.title, article.description, lexicon)
    }
    if generator is not None:
        try:
            updates["generated_content"] = generator(article.title, article.description)
        except Exception:
            logger.exception("Content generation failed for %r", article.title)
    return article.model_copy(update=updates)


def prepare_articles(
    raw_items: Sequence[Any],
    *,
    generator: Optional[ContentGenerator] = None,
    lexicon: Optional[Lexicon] = None,
    placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE,
    max_workers: int = 1,
) -> List[Article]:
    """Prepare every record, preserving feed order."""

    def _prepare(raw: Any) -> Article:
        return prepare_article(
            raw,
            generator=generator,
            lexicon=lexicon,
            placeholder_image=placeholder_image,
        )

    if max_workers <= 1 or len(raw_items) <= 1:
        return [_prepare(raw) for raw in raw_items]

    worker_count = min(max_workers, len(raw_items))
    with ThreadPoolExecutor(max_workers=worker_count) as executor:
        return list(executor.map(_prepare, raw_items))


def build_summary(articles: Iterable[Article], limit: int = 10) -> Markup:
    """
    Linked list of the top stories, one line per article.

    Anchors point at the article's position in the full list, so they match
    the `article-{index}` ids the page template renders.
    """
    lines = []
    for index, article in enumerate(articles):
        if index >= limit:
            break
        sentiment = article.sentiment or "neutral"
        lines.append(
            Markup(
                '<a href="#article-{index}" style="scroll-behavior: smooth;">{title}</a>'
                ' <span class="badge bg-{color}">{sentiment}</span>'
            ).format(
                index=index,
                title=article.title,
                color=badge_color(sentiment),
                sentiment=sentiment,
            )
        )
    return Markup(SUMMARY_SEPARATOR).join(lines)


def failed_page(settings: Settings) -> NewsPage:
    return NewsPage(
        articles=[],
        summary=FAILURE_MESSAGE,
        revalidate_seconds=settings.revalidate_seconds,
        ok=False,
    )


async def build_news_page(
    settings: Optional[Settings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    generator: Optional[ContentGenerator] = None,
    lexicon: Optional[Lexicon] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> NewsPage:
    """
    Build the page data for one request.

    Pass `payload` to skip the network fetch (offline builds and tests).
    """
    settings = settings or get_settings()
    if generator is None:
        generator = build_content_generator(settings)
    if lexicon is None:
        lexicon = resolve_lexicon(settings)

    if payload is None:
        try:
            payload = await fetch_feed(settings, client=client)
        except FeedError:
            logger.exception("Error fetching news")
            return failed_page(settings)

    raw_items = extract_feed_items(payload)
    articles = await asyncio.to_thread(
        prepare_articles,
        raw_items,
        generator=generator,
        lexicon=lexicon,
        placeholder_image=settings.placeholder_image_url,
        max_workers=settings.prepare_workers,
    )
    logger.info("Prepared %d articles", len(articles))

    return NewsPage(
        articles=articles,
        summary=str(build_summary(articles, limit=settings.top_story_count)),
        revalidate_seconds=settings.revalidate_seconds,
    )
