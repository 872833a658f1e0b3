"""Package for rendering a financial news page with keyword sentiment badges."""

__all__ = ["config", "models", "normalizer", "sentiment", "content", "feed", "page"]
