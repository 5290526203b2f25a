"""SQLAlchemy implementation of SourceRepository over the sources tables."""

import logging
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_ingest.application.interfaces import SourceRepository
from knowledge_ingest.domain.entities import KnowledgeSource, SourceStatus, SourceType
from knowledge_ingest.infrastructure.database.models import (
    FileSourceModel,
    SourceModel,
    WebsiteSourceModel,
)

logger = logging.getLogger(__name__)


class SQLAlchemySourceRepository(SourceRepository):
    """Concrete source repository backed by PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_sources_for_agent(self, agent_id: int) -> list[KnowledgeSource]:
        result = await self._session.execute(
            select(SourceModel)
            .where(SourceModel.agent_id == agent_id)
            .where(SourceModel.is_deleted.is_(False))
            .order_by(SourceModel.id)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def get_raw_text(self, source_id: int) -> str | None:
        result = await self._session.execute(
            select(FileSourceModel.text_content)
            .where(FileSourceModel.source_id == source_id)
            .order_by(FileSourceModel.id)
            .limit(1)
        )
        row = result.first()
        if row is None:
            return None
        return row.text_content or ""

    async def get_type_metadata(self, source_id: int, source_type: str) -> dict[str, Any]:
        if source_type == SourceType.FILE.value:
            result = await self._session.execute(
                select(FileSourceModel.file_size).where(FileSourceModel.source_id == source_id).limit(1)
            )
            file_size = result.scalar_one_or_none()
            return {"file_size": file_size} if file_size is not None else {}

        if source_type == SourceType.WEBSITE.value:
            result = await self._session.execute(
                select(WebsiteSourceModel.url).where(WebsiteSourceModel.source_id == source_id).limit(1)
            )
            url = result.scalar_one_or_none()
            return {"url": url} if url else {}

        return {}

    async def mark_embedded(self, source_ids: list[int]) -> int:
        if not source_ids:
            return 0
        result = await self._session.execute(
            update(SourceModel)
            .where(SourceModel.id.in_(source_ids))
            .values(is_embedded=True, status=SourceStatus.COMPLETED.value)
        )
        await self._session.flush()
        logger.info("Marked %d sources as embedded", result.rowcount)
        return result.rowcount

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_domain(model: SourceModel) -> KnowledgeSource:
        return KnowledgeSource(
            id=model.id,
            agent_id=model.agent_id,
            source_type=model.source_type,
            name=model.name,
            description=model.description,
            status=model.status,
            is_deleted=model.is_deleted,
            is_embedded=model.is_embedded,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
