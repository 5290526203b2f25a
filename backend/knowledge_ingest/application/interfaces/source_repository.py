"""Abstract repository interface (port) for the knowledge source registry and raw-text store."""

from abc import ABC, abstractmethod
from typing import Any

from knowledge_ingest.domain.entities import KnowledgeSource


class SourceRepository(ABC):
    """Port for reading knowledge sources and confirming their embedding."""

    @abstractmethod
    async def get_sources_for_agent(self, agent_id: int) -> list[KnowledgeSource]:
        """All non-deleted sources registered for an agent."""
        ...

    @abstractmethod
    async def get_raw_text(self, source_id: int) -> str | None:
        """Extracted text of a source, or None when no text record exists."""
        ...

    @abstractmethod
    async def get_type_metadata(self, source_id: int, source_type: str) -> dict[str, Any]:
        """Type-specific metadata, e.g. ``{"file_size": 1024}`` or ``{"url": "..."}``."""
        ...

    @abstractmethod
    async def mark_embedded(self, source_ids: list[int]) -> int:
        """Flag sources as embedded and completed. Idempotent. Returns rows touched."""
        ...
