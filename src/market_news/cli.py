"""Command-line entry points for the financial news page."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.markup import escape

from .config import get_settings
from .content import build_content_generator
from .feed import FeedError, load_feed_file
from .logging_config import setup_logging
from .models import NewsPage
from .page import build_news_page
from .render import render_page
from .sentiment import resolve_lexicon, score_sentiment

app = typer.Typer(help="Build and serve a financial news page with sentiment badges.")


def _write_output(out_path: Path, html: str, json_payload: dict) -> None:
    suffix = out_path.suffix.lower()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".json":
        out_path.write_text(
            json.dumps(json_payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    else:
        out_path.write_text(html, encoding="utf-8")


def _print_page(page: NewsPage) -> None:
    if not page.articles:
        rprint(f"[yellow]{escape(page.summary)}[/yellow]")
        return
    colors = {"bullish": "green", "bearish": "red"}
    for index, article in enumerate(page.articles):
        color = colors.get(article.sentiment or "", "white")
        rprint(
            f"{index:>3}. [{color}]{article.sentiment or '-'}[/{color}] "
            f"{escape(article.title)} [dim]({escape(article.source.name)})[/dim]"
        )


@app.command("build")
def build_command(
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the page to a file (.html, or .json for the page data). Defaults to a stdout listing.",
    ),
    feed_file: Optional[Path] = typer.Option(
        None,
        "--feed-file",
        "-f",
        help="Build from a saved feed JSON payload instead of calling the API.",
    ),
    generator: Optional[str] = typer.Option(
        None,
        "--generator",
        "-g",
        help="Content generator: 'stub' or 'openai' (overrides CONTENT_GENERATOR).",
        case_sensitive=False,
    ),
):
    """
    Build the page once, the way a static site build would.

    Exits with code 1 when the upstream fetch failed; the degraded page is
    still written.
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        content_generator = build_content_generator(settings, name=generator)
        lexicon = resolve_lexicon(settings)
    except (ValueError, RuntimeError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    payload = None
    if feed_file is not None:
        try:
            payload = load_feed_file(feed_file)
        except FeedError as exc:
            raise typer.BadParameter(str(exc)) from exc

    page = asyncio.run(
        build_news_page(
            settings,
            generator=content_generator,
            lexicon=lexicon,
            payload=payload,
        )
    )

    if out:
        html = render_page(page, placeholder_image=settings.placeholder_image_url)
        _write_output(out, html, page.model_dump(mode="json", by_alias=True))
        rprint(f"[cyan]Wrote {len(page.articles)} articles to {out}[/cyan]")
    else:
        _print_page(page)

    if not page.ok:
        raise typer.Exit(code=1)


@app.command("classify")
def classify_command(
    title: str = typer.Argument(..., help="Headline text."),
    description: str = typer.Argument("", help="Optional summary text."),
):
    """Print the sentiment label and keyword hits for a headline."""
    settings = get_settings()
    try:
        lexicon = resolve_lexicon(settings)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    score = score_sentiment(title, description, lexicon)
    rprint(f"[bold]{score.label}[/bold]")
    rprint(f"bullish {score.bullish}: {', '.join(score.bullish_terms) or '-'}")
    rprint(f"bearish {score.bearish}: {', '.join(score.bearish_terms) or '-'}")


@app.command("serve")
def serve_command(
    host: str = typer.Option("0.0.0.0", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
):
    """Run the HTTP service."""
    import uvicorn

    setup_logging(get_settings().log_level)
    uvicorn.run("market_news.server:app", host=host, port=port, reload=reload)


def main():
    app()


if __name__ == "__main__":
    main()
