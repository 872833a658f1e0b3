"""Data models for the market news page."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Sentiment = Literal["bullish", "bearish", "neutral"]


class ArticleSource(BaseModel):
    """Publisher of an article."""

    model_config = ConfigDict(frozen=True)

    name: str


class Article(BaseModel):
    """Normalized representation of one upstream feed item."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str = ""
    url: str = Field(..., description="Link to the original article; not validated.")
    url_to_image: str = Field(..., alias="urlToImage")
    published_at: str = Field(
        ..., alias="publishedAt", description="ISO-8601 timestamp without timezone."
    )
    source: ArticleSource
    generated_content: Optional[str] = Field(None, alias="generatedContent")
    sentiment: Optional[Sentiment] = None


class NewsPage(BaseModel):
    """Everything the page template needs for one build."""

    model_config = ConfigDict(populate_by_name=True)

    articles: List[Article]
    summary: str = Field(..., description="HTML fragment for the top stories card.")
    generated_at: datetime = Field(default_factory=datetime.now, alias="generatedAt")
    revalidate_seconds: int = Field(86400, alias="revalidateSeconds")
    ok: bool = True
