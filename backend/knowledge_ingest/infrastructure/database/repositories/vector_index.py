"""pgvector-backed VectorIndex — embeds records and upserts them by id."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_ingest.application.interfaces import EmbeddingProvider, VectorIndex
from knowledge_ingest.domain.entities import VectorRecord
from knowledge_ingest.infrastructure.database.models import VectorRecordModel

logger = logging.getLogger(__name__)


class PgVectorIndex(VectorIndex):
    """Concrete vector index backed by PostgreSQL + pgvector."""

    def __init__(self, session: AsyncSession, embedding_provider: EmbeddingProvider):
        self._session = session
        self._embeddings = embedding_provider

    async def upsert_records(self, records: list[VectorRecord], *, agent_id: int) -> int:
        if not records:
            return 0

        vectors = await self._embed([r.text for r in records])
        if len(vectors) != len(records):
            raise RuntimeError(f"Embedding provider returned {len(vectors)} vectors for {len(records)} records")

        # One savepoint per call: a failed write leaves earlier sources intact.
        async with self._session.begin_nested():
            for record, vector in zip(records, vectors):
                await self._session.merge(
                    VectorRecordModel(
                        id=record.id,
                        agent_id=agent_id,
                        source_id=record.source_id,
                        chunk_index=record.chunk_index,
                        text=record.text,
                        metadata_=record.to_metadata(),
                        embedding=vector,
                    )
                )

        logger.info("Upserted %d vector records for agent %s", len(records), agent_id)
        return len(records)

    async def _embed(self, texts: list[str]) -> list[list[float]]:
        batch_size = self._embeddings.max_batch_size
        vectors: list[list[float]] = []
        for start in range(0, len(texts), batch_size):
            vectors.extend(await self._embeddings.generate_embeddings(texts[start : start + batch_size]))
        return vectors
