"""FastAPI service that renders the financial news page."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from .config import Settings, get_settings
from .logging_config import setup_logging
from .page import build_news_page
from .render import render_page


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings().log_level)
    yield


app = FastAPI(title="Financial News", lifespan=lifespan)


def cors_options(settings: Settings) -> Dict[str, Any]:
    """Origins and credential flag for the JSON endpoint's CORS policy."""
    origins = settings.cors_origins
    if settings.cors_allow_all or not origins:
        # Wildcard origins cannot be combined with credentials.
        return {"allow_origins": ["*"], "allow_credentials": False}
    return {
        "allow_origins": origins,
        "allow_credentials": settings.cors_allow_credentials,
    }


app.add_middleware(
    CORSMiddleware,
    allow_methods=["GET"],
    allow_headers=["*"],
    **cors_options(get_settings()),
)


def cache_headers(revalidate_seconds: int) -> Dict[str, str]:
    """Let the hosting layer serve a cached copy until the refresh interval passes."""
    return {
        "Cache-Control": (
            f"public, s-maxage={revalidate_seconds}, stale-while-revalidate"
        )
    }


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    settings = get_settings()
    page = await build_news_page(settings)
    html = render_page(page, placeholder_image=settings.placeholder_image_url)
    return HTMLResponse(content=html, headers=cache_headers(page.revalidate_seconds))


@app.get("/api/articles")
async def articles() -> JSONResponse:
    """Same data as the page, using the camelCase field names."""
    page = await build_news_page(get_settings())
    return JSONResponse(
        content=page.model_dump(mode="json", by_alias=True),
        headers=cache_headers(page.revalidate_seconds),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "market_news.server:app",
        host=os.getenv("NEWS_HOST", "0.0.0.0"),
        port=int(os.getenv("NEWS_PORT", "8000")),
        reload=os.getenv("NEWS_RELOAD", "false").lower() == "true",
    )
