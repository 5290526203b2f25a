"""OpenRouter infrastructure package."""

from .openrouter_embedding_provider import EmbeddingAPIError, OpenRouterEmbeddingProvider

__all__ = ["EmbeddingAPIError", "OpenRouterEmbeddingProvider"]
