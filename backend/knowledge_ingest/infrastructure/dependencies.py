"""FastAPI dependency injection — wires infrastructure to the application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_ingest.config import get_settings
from knowledge_ingest.application.services import (
    KnowledgeTrainingService,
    SemanticChunkerService,
    SourceExtractorService,
)
from knowledge_ingest.infrastructure.context import HeuristicDocumentContextExtractor
from knowledge_ingest.infrastructure.database.session import get_db_session
from knowledge_ingest.infrastructure.database.repositories import (
    PgVectorIndex,
    SQLAlchemySourceRepository,
)
from knowledge_ingest.infrastructure.openrouter import OpenRouterEmbeddingProvider


def get_semantic_chunker_service() -> SemanticChunkerService:
    """Provides a chunker with heuristic document context extraction."""
    return SemanticChunkerService(
        context_extractor=HeuristicDocumentContextExtractor(),
        settings=get_settings(),
    )


async def get_source_extractor_service(
    session: AsyncSession = Depends(get_db_session),
    chunker: SemanticChunkerService = Depends(get_semantic_chunker_service),
) -> AsyncGenerator[SourceExtractorService, None]:
    """Provides a SourceExtractorService bound to the request's session."""
    yield SourceExtractorService(
        source_repository=SQLAlchemySourceRepository(session),
        chunker=chunker,
        settings=get_settings(),
    )


async def get_knowledge_training_service(
    session: AsyncSession = Depends(get_db_session),
    extractor: SourceExtractorService = Depends(get_source_extractor_service),
) -> AsyncGenerator[KnowledgeTrainingService, None]:
    """Provides the training pipeline with the pgvector index and OpenRouter embeddings."""
    settings = get_settings()
    embedding_provider = OpenRouterEmbeddingProvider(
        api_key=settings.openrouter_api_key,
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
        model=settings.embedding_model,
        model_dimensions=settings.embedding_dimensions,
    )
    yield KnowledgeTrainingService(
        extractor=extractor,
        vector_index=PgVectorIndex(session, embedding_provider),
    )
