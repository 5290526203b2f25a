"""Abstract interface (port) for turning chunk text into embedding vectors."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Port for embedding generation, used by vector index adapters."""

    # Largest number of texts sent in one request.
    max_batch_size: int = 50

    @abstractmethod
    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Return one vector per input text, in input order."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Length of every vector this provider returns."""
        ...
