"""Abstract interface (port) for durable vector record storage."""

from abc import ABC, abstractmethod

from knowledge_ingest.domain.entities import VectorRecord


class VectorIndex(ABC):
    """Port for the vector index — implemented in the infrastructure layer."""

    @abstractmethod
    async def upsert_records(self, records: list[VectorRecord], *, agent_id: int) -> int:
        """Embed and durably store a batch of records, replacing any with the same id.

        Returns the number of records written. Raises on failure; a batch is
        either stored or reported as failed.
        """
        ...
