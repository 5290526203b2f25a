"""Chunking API controller — preview how a text would be chunked for the vector index."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from knowledge_ingest.application.chunking import build_chunk_context
from knowledge_ingest.application.schemas import (
    ChunkContextSchema,
    ChunkingPreviewRequest,
    ChunkingPreviewResponse,
    ChunkingStatsSchema,
    ChunkMetadataSchema,
    DocumentContextSchema,
)
from knowledge_ingest.application.services import SemanticChunkerService
from knowledge_ingest.domain.entities import ChunkingResult
from knowledge_ingest.domain.exceptions import ChunkingConfigError, ChunkingError
from knowledge_ingest.infrastructure.dependencies import get_semantic_chunker_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chunking", tags=["Chunking"])


def _result_to_response(result: ChunkingResult) -> ChunkingPreviewResponse:
    """Map a ChunkingResult to its API response."""
    context = result.document_context
    chunk_contexts = []
    if context is not None:
        for index in range(len(result.chunks)):
            cc = build_chunk_context(context, result.chunks, index)
            chunk_contexts.append(
                ChunkContextSchema(
                    chunk_position=cc.chunk_position,
                    document_title=cc.document_title,
                    section_title=cc.section_title,
                    preceding_context=cc.preceding_context,
                    following_context=cc.following_context,
                )
            )

    return ChunkingPreviewResponse(
        chunks=result.chunks,
        metadata=[
            ChunkMetadataSchema(
                chunk_index=m.chunk_index,
                start_position=m.start_position,
                end_position=m.end_position,
                strategy=m.strategy,
                contains_key_facts=m.contains_key_facts,
                fact_types=m.fact_types,
                overlap_strategy=m.overlap_strategy,
                overlap_prefix_length=m.overlap_prefix_length,
                has_overlap_prefix=m.has_overlap_prefix,
            )
            for m in result.metadata
        ],
        stats=ChunkingStatsSchema(
            total_chunks=result.stats.total_chunks,
            average_chunk_size=result.stats.average_chunk_size,
            processing_time_ms=result.stats.processing_time_ms,
        ),
        document_context=(
            DocumentContextSchema(
                title=context.title,
                summary=context.summary,
                section_titles=context.section_titles,
                word_count=context.word_count,
            )
            if context
            else None
        ),
        chunk_contexts=chunk_contexts,
    )


@router.post("/preview", response_model=ChunkingPreviewResponse)
async def preview_chunks(
    request: ChunkingPreviewRequest,
    chunker: SemanticChunkerService = Depends(get_semantic_chunker_service),
) -> ChunkingPreviewResponse:
    """Chunk the posted text with optional config overrides; nothing is stored."""
    try:
        result = await chunker.chunk_text(
            request.text,
            request.overrides(),
            request.source_id,
            request.source_type,
            request.source_name,
        )
    except ChunkingConfigError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ChunkingError as e:
        logger.error("Chunking preview failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return _result_to_response(result)
