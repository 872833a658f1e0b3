"""Keyword-count sentiment labels for news headlines."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .models import Sentiment
from .schema import validate_lexicon_payload

# Case-insensitive keyword lists per label. Matching is substring presence,
# so "up" also counts inside "upgrade" and "downturn" counts as "down".
DEFAULT_LEXICON: Dict[str, Tuple[str, ...]] = {
    "bullish": (
        "gain",
        "rise",
        "grow",
        "up",
        "strong",
        "positive",
        "boost",
        "rally",
        "surge",
        "profit",
        "success",
        "optimistic",
        "breakthrough",
        "expansion",
        "increase",
        "outperform",
    ),
    "bearish": (
        "lose",
        "fall",
        "drop",
        "down",
        "weak",
        "negative",
        "slump",
        "decline",
        "plunge",
        "loss",
        "fail",
        "pessimistic",
        "crisis",
        "contraction",
        "decrease",
        "underperform",
    ),
}

BADGE_COLORS: Dict[str, str] = {
    "bullish": "success",
    "bearish": "danger",
    "neutral": "secondary",
}

Lexicon = Mapping[str, Sequence[str]]


@dataclass(frozen=True)
class SentimentScore:
    """Distinct keyword hits per side."""

    bullish: int
    bearish: int
    bullish_terms: Tuple[str, ...] = ()
    bearish_terms: Tuple[str, ...] = ()

    @property
    def label(self) -> Sentiment:
        if self.bullish > self.bearish:
            return "bullish"
        if self.bearish > self.bullish:
            return "bearish"
        return "neutral"


def _matched_terms(text: str, terms: Sequence[str]) -> Tuple[str, ...]:
    return tuple(term for term in terms if term.lower() in text)


def score_sentiment(
    title: str, description: str, lexicon: Optional[Lexicon] = None
) -> SentimentScore:
    """
    Count the distinct bullish and bearish terms present in title + description.

    Each term contributes at most 1 regardless of how often it appears.
    """
    words = lexicon or DEFAULT_LEXICON
    text = f"{title or ''} {description or ''}".lower()
    bullish = _matched_terms(text, words.get("bullish", ()))
    bearish = _matched_terms(text, words.get("bearish", ()))
    return SentimentScore(
        bullish=len(bullish),
        bearish=len(bearish),
        bullish_terms=bullish,
        bearish_terms=bearish,
    )


def classify_sentiment(
    title: str, description: str, lexicon: Optional[Lexicon] = None
) -> Sentiment:
    """Return bullish, bearish, or neutral; equal scores (including 0-0) are neutral."""
    return score_sentiment(title, description, lexicon).label


def badge_color(sentiment: Optional[str]) -> str:
    return BADGE_COLORS.get(sentiment or "", "secondary")


def load_lexicon(path: Path | str) -> Dict[str, Tuple[str, ...]]:
    """Load a keyword-set-name -> terms mapping from JSON and validate it."""
    lexicon_path = Path(path)
    try:
        payload = json.loads(lexicon_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Could not read lexicon file {lexicon_path}: {exc}") from exc
    validate_lexicon_payload(payload)
    return {
        name: tuple(term.strip().lower() for term in terms)
        for name, terms in payload.items()
    }


def resolve_lexicon(settings) -> Dict[str, Tuple[str, ...]]:
    """Return the configured lexicon override or the built-in one."""
    if settings.sentiment_lexicon_path:
        return load_lexicon(settings.sentiment_lexicon_path)
    return dict(DEFAULT_LEXICON)
