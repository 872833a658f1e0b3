"""Configuration helpers for the market news page."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    alpha_vantage_api_key: str = Field(
        "YOUR_API_KEY",
        alias="ALPHA_VANTAGE_API_KEY",
        description="Upstream API key; the sentinel is sent as-is when unset.",
    )
    news_api_url: str = Field(
        "https://www.alphavantage.co/query", alias="NEWS_API_URL"
    )
    news_function: str = Field("NEWS_SENTIMENT", alias="NEWS_FUNCTION")
    news_topics: str = Field(
        "financial_markets",
        alias="NEWS_TOPICS",
        description="Topic filter passed to the upstream feed.",
    )
    request_timeout_seconds: float = Field(10.0, alias="REQUEST_TIMEOUT_SECONDS")
    placeholder_image_url: str = Field(
        "https://via.placeholder.com/150", alias="PLACEHOLDER_IMAGE_URL"
    )
    top_story_count: int = Field(
        10, alias="TOP_STORY_COUNT", description="Articles linked from the summary."
    )
    revalidate_seconds: int = Field(
        86400,
        alias="REVALIDATE_SECONDS",
        description="Refresh hint for the hosting layer (24h by default).",
    )
    content_generator: str = Field(
        "stub",
        alias="CONTENT_GENERATOR",
        description="Content backend: 'stub' (template) or 'openai'.",
    )
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    generator_model: str = Field("gpt-5-mini", alias="GENERATOR_MODEL")
    max_tokens: int = Field(
        400,
        alias="MAX_TOKENS",
        description="Max output tokens per generated post; 0 removes the cap.",
    )
    temperature: float = Field(0.3, alias="TEMPERATURE")
    sentiment_lexicon_path: str | None = Field(
        None,
        alias="SENTIMENT_LEXICON_PATH",
        description="Optional JSON file overriding the built-in keyword lexicon.",
    )
    prepare_workers: int = Field(
        1,
        alias="PREPARE_WORKERS",
        description="Threads used to prepare articles; 1 keeps it sequential.",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_allow_all: bool = Field(True, alias="CORS_ALLOW_ALL")
    cors_allow_origins: str = Field(
        "",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated origins; used only when CORS_ALLOW_ALL is false.",
    )
    cors_allow_credentials: bool = Field(False, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    """Return a settings instance read from the current environment."""
    return Settings()
