"""Render prepared page data to HTML with Jinja2."""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from .models import NewsPage
from .normalizer import DEFAULT_PLACEHOLDER_IMAGE
from .sentiment import badge_color

PAGE_TEMPLATE = "index.html.j2"


def calendar_date(value: Any) -> str:
    """Locale calendar date for an ISO timestamp; unparseable values pass through."""
    if isinstance(value, datetime):
        return value.strftime("%x")
    try:
        return datetime.fromisoformat(str(value)).strftime("%x")
    except ValueError:
        return str(value)


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("market_news", "templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["badge_color"] = badge_color
    env.filters["calendar_date"] = calendar_date
    return env


def render_page(
    page: NewsPage, placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE
) -> str:
    template = get_environment().get_template(PAGE_TEMPLATE)
    return template.render(page=page, placeholder_image=placeholder_image)
