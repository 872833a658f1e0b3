import json

import pytest

from market_news.config import Settings
from market_news.sentiment import (
    DEFAULT_LEXICON,
    badge_color,
    classify_sentiment,
    load_lexicon,
    resolve_lexicon,
    score_sentiment,
)


def test_default_lexicon_has_sixteen_terms_per_side():
    assert len(DEFAULT_LEXICON["bullish"]) == 16
    assert len(DEFAULT_LEXICON["bearish"]) == 16
    assert "outperform" in DEFAULT_LEXICON["bullish"]
    assert "underperform" in DEFAULT_LEXICON["bearish"]


@pytest.mark.parametrize(
    "title, description",
    [
        ("Shares gain", ""),
        ("Tech rally", "Optimistic outlook after breakthrough"),
        ("", "Strong profit"),
    ],
)
def test_bullish_only_text_is_bullish(title, description):
    assert classify_sentiment(title, description) == "bullish"


@pytest.mark.parametrize(
    "title, description",
    [
        ("Shares plunge amid crisis", ""),
        ("Retail slump", "Weak demand and a pessimistic forecast"),
    ],
)
def test_bearish_only_text_is_bearish(title, description):
    assert classify_sentiment(title, description) == "bearish"


def test_text_without_keywords_is_neutral():
    assert classify_sentiment("Central bank holds rates steady", "") == "neutral"
    assert classify_sentiment("", "") == "neutral"


def test_equal_nonzero_scores_are_neutral():
    assert classify_sentiment("Stocks up", "bonds down") == "neutral"
    score = score_sentiment("Tech rally and profit offset", "energy slump and loss")
    assert (score.bullish, score.bearish) == (2, 2)
    assert score.label == "neutral"


def test_matching_is_case_insensitive():
    for word in ("GAIN", "Gain", "gain"):
        score = score_sentiment(word, "")
        assert score.bullish == 1
        assert score.bullish_terms == ("gain",)


def test_repeated_keyword_counts_once():
    score = score_sentiment("gain gain gain", "loss")
    assert score.bullish == 1
    assert score.bearish == 1
    assert score.label == "neutral"


def test_substring_presence_counts():
    # "upgrade" contains "up"
    assert score_sentiment("Analyst upgrade", "").bullish_terms == ("up",)


def test_custom_lexicon_replaces_defaults():
    lexicon = {"bullish": ("moon",), "bearish": ("rekt",)}
    assert classify_sentiment("To the MOON", "", lexicon) == "bullish"
    assert classify_sentiment("Shares gain", "", lexicon) == "neutral"


def test_badge_color_mapping():
    assert badge_color("bullish") == "success"
    assert badge_color("bearish") == "danger"
    assert badge_color("neutral") == "secondary"
    assert badge_color(None) == "secondary"


def test_load_lexicon_lowercases_terms(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(
        json.dumps({"bullish": ["Moon", "ATH"], "bearish": ["Rekt"]}),
        encoding="utf-8",
    )
    lexicon = load_lexicon(path)
    assert lexicon == {"bullish": ("moon", "ath"), "bearish": ("rekt",)}


def test_load_lexicon_rejects_missing_label(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(json.dumps({"bullish": ["moon"]}), encoding="utf-8")
    with pytest.raises(ValueError, match="Lexicon validation failed"):
        load_lexicon(path)


def test_load_lexicon_rejects_invalid_json(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Could not read lexicon file"):
        load_lexicon(path)


def test_resolve_lexicon_uses_configured_file(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(
        json.dumps({"bullish": ["moon"], "bearish": ["rekt"]}), encoding="utf-8"
    )
    settings = Settings(SENTIMENT_LEXICON_PATH=str(path))
    assert resolve_lexicon(settings)["bullish"] == ("moon",)


def test_resolve_lexicon_defaults_to_builtin(monkeypatch):
    monkeypatch.delenv("SENTIMENT_LEXICON_PATH", raising=False)
    settings = Settings(SENTIMENT_LEXICON_PATH=None)
    assert resolve_lexicon(settings) == dict(DEFAULT_LEXICON)


def test_load_lexicon_rejects_blank_terms(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(
        json.dumps({"bullish": ["moon", "  "], "bearish": ["rekt"]}), encoding="utf-8"
    )
    with pytest.raises(ValueError, match="bullish.1"):
        load_lexicon(path)


def test_loaded_lexicon_leaves_unrelated_text_neutral(tmp_path):
    path = tmp_path / "lexicon.json"
    path.write_text(
        json.dumps({"bullish": [" Moon "], "bearish": ["rekt"]}), encoding="utf-8"
    )
    lexicon = load_lexicon(path)
    assert classify_sentiment("Central bank holds rates", "", lexicon) == "neutral"
    assert classify_sentiment("Token goes to the moon", "", lexicon) == "bullish"
