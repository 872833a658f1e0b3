"""Per-article "generated content" backends.

The default backend is a deterministic template stub. A real text-generation
backend can be swapped in behind the same `(title, description) -> text`
contract without touching normalization or classification.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol

from openai import OpenAI

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

CONTENT_TEMPLATE = (
    'This is an AI-generated blog post about "{title}". '
    "The article discusses: {description}. Further analysis suggests... "
    "[Continue with AI-generated insights and implications based on the summary]."
)

GENERATOR_NAMES = ("stub", "openai")


class ContentGenerator(Protocol):
    def __call__(self, title: str, description: str) -> str: ...


def stub_content(title: str, description: str) -> str:
    """Embed title and description verbatim in the placeholder template."""
    return CONTENT_TEMPLATE.format(title=title, description=description)


@lru_cache(maxsize=None)
def _load_prompt_file(filename: str) -> str:
    return (PROMPTS_DIR / filename).read_text(encoding="utf-8")


def build_prompt(title: str, description: str) -> str:
    """Prompt a real model would receive for one article."""
    template = _load_prompt_file("blog_post.md")
    return template.format(title=title, description=description)


def build_client(api_key: Optional[str] = None) -> OpenAI:
    """Create an OpenAI client; separated for easier testing."""
    return OpenAI(api_key=api_key)


def _response_text_or_raise(response: object) -> str:
    """Extract response text or raise a clear error when output is missing."""
    text = getattr(response, "output_text", None)
    if isinstance(text, str) and text.strip():
        return text.strip()

    status = getattr(response, "status", None)
    if status == "incomplete":
        details = getattr(response, "incomplete_details", None)
        reason = getattr(details, "reason", None) if details else None
        hint = ""
        if reason == "max_output_tokens":
            hint = " Increase MAX_TOKENS or set it to 0 to remove the cap."
        raise RuntimeError(f"Generator response incomplete (reason={reason}).{hint}")

    err = getattr(response, "error", None)
    if err:
        raise RuntimeError(f"Generator response error: {err}")

    raise RuntimeError("Generator response missing output text.")


class OpenAIContentGenerator:
    """Write a short blog post per article with the OpenAI Responses API."""

    def __init__(
        self,
        client: OpenAI,
        model: str,
        max_tokens: int = 400,
        temperature: Optional[float] = None,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def __call__(self, title: str, description: str) -> str:
        request_kwargs = {
            "model": self.model,
            "input": [{"role": "user", "content": build_prompt(title, description)}],
        }
        if self.max_tokens and self.max_tokens > 0:
            request_kwargs["max_output_tokens"] = self.max_tokens
        # gpt-5 family models reject the temperature parameter.
        if self.temperature is not None and not self.model.startswith("gpt-5"):
            request_kwargs["temperature"] = self.temperature

        response = self.client.responses.create(**request_kwargs)
        return _response_text_or_raise(response)


def build_content_generator(
    settings, name: Optional[str] = None, client: Optional[OpenAI] = None
) -> ContentGenerator:
    """Pick the configured backend; raises on unknown names or missing keys."""
    selected = (name or settings.content_generator or "stub").strip().lower()
    if selected == "stub":
        return stub_content
    if selected == "openai":
        if client is None:
            if not settings.openai_api_key:
                raise RuntimeError(
                    "OPENAI_API_KEY is required for the openai content generator."
                )
            client = build_client(settings.openai_api_key)
        return OpenAIContentGenerator(
            client,
            model=settings.generator_model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
        )
    raise ValueError(
        f"Unknown content generator {selected!r}; expected one of {', '.join(GENERATOR_NAMES)}."
    )
