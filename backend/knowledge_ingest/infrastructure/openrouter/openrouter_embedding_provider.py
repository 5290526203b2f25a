"""OpenRouter embedding provider — calls the /embeddings endpoint for chunk text.

Default model: google/gemini-embedding-001, truncated to the configured
dimensions so vectors fit the ``vector_records.embedding`` column.
"""

import logging
from typing import Any

import httpx

from knowledge_ingest.application.interfaces import EmbeddingProvider

logger = logging.getLogger(__name__)

# nomic-embed-text models require a task prefix on documents; Gemini models do not.
_NOMIC_DOCUMENT_PREFIX = "search_document: "


class EmbeddingAPIError(RuntimeError):
    """Raised when the embeddings endpoint answers with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Embedding API returned {status_code}: {body}")


class OpenRouterEmbeddingProvider(EmbeddingProvider):
    """Infrastructure adapter — generates embeddings via the OpenRouter /embeddings API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_name: str = "Knowledge Ingest",
        model: str = "google/gemini-embedding-001",
        model_dimensions: int = 768,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._app_name = app_name
        self._model = model
        self._dimensions = model_dimensions
        self._http_client = http_client

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": self._app_name,
        }

    def _prepare_inputs(self, texts: list[str]) -> list[str]:
        if "nomic" in self._model.lower():
            return [f"{_NOMIC_DOCUMENT_PREFIX}{t}" for t in texts]
        return texts

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        payload: dict[str, Any] = {
            "model": self._model,
            "input": self._prepare_inputs(texts),
            "dimensions": self._dimensions,
        }

        client = self._http_client or httpx.AsyncClient(timeout=120.0)
        try:
            response = await client.post(
                f"{self._base_url}/embeddings", headers=self._get_headers(), json=payload
            )
        finally:
            if self._http_client is None:
                await client.aclose()

        if response.status_code != 200:
            error_text = response.text[:500]
            logger.error("Embedding API error %d: %s", response.status_code, error_text)
            raise EmbeddingAPIError(response.status_code, error_text)

        items = sorted(response.json().get("data", []), key=lambda x: x.get("index", 0))
        result = [item["embedding"] for item in items]

        logger.info(
            "Generated %d embeddings (model=%s, dims=%d)",
            len(result),
            self._model,
            len(result[0]) if result else 0,
        )
        return result
