"""Semantic chunker service — the single entry point of the chunking engine.

Resolves the configuration, runs the selected strategy pipeline, applies
overlap, and attaches per-chunk metadata:

    semantic:      segment → normalize → overlap → tag
    hierarchical:  segment → normalize → summary + detail → overlap → tag
    content-aware: adaptive segment → normalize → overlap → tag
"""

import logging
import time
from collections.abc import Mapping
from typing import Any

from knowledge_ingest.application.chunking import (
    apply_overlap,
    contains_key_facts,
    content_aware_chunks,
    fact_types,
    hierarchical_chunks,
    resolve_chunking_config,
    semantic_chunks,
    strip_hierarchy_prefix,
)
from knowledge_ingest.application.interfaces import DocumentContextExtractor
from knowledge_ingest.config import Settings
from knowledge_ingest.domain.entities import (
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
    ChunkingStrategy,
    ChunkMetadata,
    DocumentContext,
    OverlappedChunk,
)
from knowledge_ingest.domain.exceptions import ChunkingConfigError, ChunkingError
from knowledge_ingest.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("SemanticChunkerService")

_STRATEGY_PIPELINES = {
    ChunkingStrategy.SEMANTIC: semantic_chunks,
    ChunkingStrategy.HIERARCHICAL: hierarchical_chunks,
    ChunkingStrategy.CONTENT_AWARE: content_aware_chunks,
}


class SemanticChunkerService:
    """Turns raw source text into bounded, overlap-annotated, fact-tagged chunks."""

    def __init__(
        self,
        context_extractor: DocumentContextExtractor | None = None,
        settings: Settings | None = None,
    ):
        self._context_extractor = context_extractor
        self._settings = settings

    async def chunk_text(
        self,
        text: str,
        config: ChunkingConfig | Mapping[str, Any] | None = None,
        source_id: int | None = None,
        source_type: str | None = None,
        source_name: str | None = None,
    ) -> ChunkingResult:
        """Chunk ``text`` according to ``config``.

        ``config`` may be a resolved ChunkingConfig or a mapping of overrides;
        unset fields fall back to the system defaults. Invalid bounds raise
        ChunkingConfigError before any work is done. Any other failure is
        raised as ChunkingError.
        """
        start = time.monotonic()
        resolved = resolve_chunking_config(config, settings=self._settings)
        strategy = resolved.effective_strategy

        try:
            document_context = await self._extract_context(text, source_id, source_type, source_name)

            bodies = _STRATEGY_PIPELINES[strategy](text, resolved)
            overlapped = apply_overlap(bodies, resolved)
            chunks = [chunk.text for chunk in overlapped]
            metadata = [
                self._build_metadata(index, chunk, text, resolved, strategy)
                for index, chunk in enumerate(overlapped)
            ]
        except ChunkingConfigError:
            raise
        except Exception as e:
            plog.step_error(PipelineStage.CHUNKING, "Error in semantic chunking", error=e)
            raise ChunkingError(f"Chunking failed: {e}") from e

        total_size = sum(len(c) for c in chunks)
        result = ChunkingResult(
            chunks=chunks,
            metadata=metadata,
            stats=ChunkingStats(
                total_chunks=len(chunks),
                average_chunk_size=round(total_size / len(chunks)) if chunks else 0,
                processing_time_ms=int((time.monotonic() - start) * 1000),
            ),
            document_context=document_context,
        )
        logger.debug(
            "Chunked %d chars into %d chunks (strategy=%s, avg=%d)",
            len(text),
            result.stats.total_chunks,
            strategy.value,
            result.stats.average_chunk_size,
        )
        return result

    async def _extract_context(
        self,
        text: str,
        source_id: int | None,
        source_type: str | None,
        source_name: str | None,
    ) -> DocumentContext | None:
        if self._context_extractor is None or source_id is None or not source_type or not source_name:
            return None
        return await self._context_extractor.extract_context(source_id, source_type, text, source_name)

    @staticmethod
    def _build_metadata(
        index: int,
        chunk: OverlappedChunk,
        source_text: str,
        config: ChunkingConfig,
        strategy: ChunkingStrategy,
    ) -> ChunkMetadata:
        # Offsets locate the chunk's own body; prepended overlap and hierarchy tags never occur in the source.
        body = strip_hierarchy_prefix(chunk.body)
        start = source_text.find(body) if body else -1
        text = chunk.text
        return ChunkMetadata(
            chunk_index=index,
            start_position=start,
            end_position=start + len(body) if start >= 0 else -1,
            strategy=strategy.value,
            contains_key_facts=contains_key_facts(text, config),
            fact_types=fact_types(text, config),
            overlap_strategy=chunk.strategy if chunk.overlap_text else None,
            overlap_prefix_length=len(chunk.overlap_text),
        )
