from fastapi.testclient import TestClient

from market_news import server
from market_news.config import Settings
from market_news.models import Article, ArticleSource, NewsPage
from market_news.page import FAILURE_MESSAGE
from market_news.server import app


def sample_page(**overrides) -> NewsPage:
    article = Article(
        title="Stocks surge on strong earnings growth",
        description="Markets rally as profit beats forecasts",
        url="http://x",
        url_to_image="https://via.placeholder.com/150",
        published_at="2024-03-01T12:00:00",
        source=ArticleSource(name="ExampleWire"),
        generated_content="Generated text",
        sentiment="bullish",
    )
    values = dict(articles=[article], summary="<a href=\"#article-0\">Stocks</a>")
    values.update(overrides)
    return NewsPage(**values)


def install_page(monkeypatch, page: NewsPage) -> list:
    calls = []

    async def fake_build(settings=None, **kwargs):
        calls.append(settings)
        return page

    monkeypatch.setattr(server, "build_news_page", fake_build)
    return calls


def test_health():
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_cors_wildcard_disables_credentials():
    cors = next(
        m for m in app.user_middleware if m.cls.__name__ == "CORSMiddleware"
    )
    assert cors.kwargs["allow_origins"] == ["*"]
    assert cors.kwargs["allow_credentials"] is False
    assert cors.kwargs["allow_methods"] == ["GET"]


def test_cors_options_for_explicit_origins():
    settings = Settings(
        CORS_ALLOW_ALL="false",
        CORS_ALLOW_ORIGINS="https://a.example, https://b.example,",
        CORS_ALLOW_CREDENTIALS="true",
    )
    assert server.cors_options(settings) == {
        "allow_origins": ["https://a.example", "https://b.example"],
        "allow_credentials": True,
    }


def test_cors_options_fall_back_to_wildcard_without_origins():
    settings = Settings(
        CORS_ALLOW_ALL="false", CORS_ALLOW_ORIGINS="", CORS_ALLOW_CREDENTIALS="true"
    )
    assert server.cors_options(settings) == {
        "allow_origins": ["*"],
        "allow_credentials": False,
    }


def test_index_renders_page_with_refresh_hint(monkeypatch):
    monkeypatch.setenv("REVALIDATE_SECONDS", "86400")
    calls = install_page(monkeypatch, sample_page())
    client = TestClient(app)

    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "s-maxage=86400" in resp.headers["cache-control"]
    assert 'id="article-0"' in resp.text
    assert "bg-success" in resp.text
    assert "Generated text" in resp.text
    assert len(calls) == 1


def test_index_still_renders_when_fetch_failed(monkeypatch):
    install_page(
        monkeypatch, sample_page(articles=[], summary=FAILURE_MESSAGE, ok=False)
    )
    client = TestClient(app)

    resp = client.get("/")

    assert resp.status_code == 200
    assert FAILURE_MESSAGE in resp.text


def test_articles_endpoint_uses_page_field_names(monkeypatch):
    install_page(monkeypatch, sample_page())
    client = TestClient(app)

    resp = client.get("/api/articles")

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    article = body["articles"][0]
    assert article["urlToImage"] == "https://via.placeholder.com/150"
    assert article["publishedAt"] == "2024-03-01T12:00:00"
    assert article["generatedContent"] == "Generated text"
    assert article["source"] == {"name": "ExampleWire"}
    assert article["sentiment"] == "bullish"
    assert body["revalidateSeconds"] == 86400
    assert "cache-control" in resp.headers
