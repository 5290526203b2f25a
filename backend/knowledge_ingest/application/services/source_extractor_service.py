"""Source extractor service — pulls eligible sources and turns them into vector records.

Pipeline per agent:
    select eligible sources → fetch raw text → chunk → drop noise → score → VectorRecord

Every source is an independent unit of work: a failure while extracting or
chunking one source is logged and isolated, never aborting the batch.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any

from knowledge_ingest.application.chunking import build_chunk_context, chunk_fixed_size
from knowledge_ingest.application.interfaces import SourceRepository
from knowledge_ingest.application.services.retrieval_scoring import (
    calculate_content_authority,
    calculate_content_freshness,
)
from knowledge_ingest.application.services.semantic_chunker_service import SemanticChunkerService
from knowledge_ingest.config import Settings, get_settings
from knowledge_ingest.domain.entities import (
    EXTRACTABLE_SOURCE_TYPES,
    NO_DESCRIPTION,
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
    ChunkingStrategy,
    ChunkPosition,
    ExtractedSource,
    KnowledgeSource,
    VectorRecord,
)
from knowledge_ingest.domain.exceptions import SourceExtractionError, SourceNotFoundError
from knowledge_ingest.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("SourceExtractorService")

# Noise filter: chunks with fewer meaningful words or characters are dropped.
_MIN_MEANINGFUL_WORDS = 15
_MIN_WORD_LENGTH = 3
_MIN_MEANINGFUL_CHARS = 100
_MIN_VALID_CONTENT_CHARS = 10
_FALLBACK_SCORE = 0.5


def is_meaningful_chunk(chunk: str) -> bool:
    """At least 15 words longer than two characters and at least 100 characters."""
    words = [word for word in chunk.split() if len(word) >= _MIN_WORD_LENGTH]
    return len(words) >= _MIN_MEANINGFUL_WORDS and len(chunk) >= _MIN_MEANINGFUL_CHARS


def filter_noise_chunks(result: ChunkingResult) -> ChunkingResult:
    """Drop noise chunks and re-index the surviving metadata contiguously."""
    kept = [(chunk, meta) for chunk, meta in zip(result.chunks, result.metadata) if is_meaningful_chunk(chunk)]
    chunks = [chunk for chunk, _ in kept]
    metadata = [replace(meta, chunk_index=index) for index, (_, meta) in enumerate(kept)]
    total_size = sum(len(c) for c in chunks)
    return ChunkingResult(
        chunks=chunks,
        metadata=metadata,
        stats=ChunkingStats(
            total_chunks=len(chunks),
            average_chunk_size=round(total_size / len(chunks)) if chunks else 0,
            processing_time_ms=result.stats.processing_time_ms,
        ),
        document_context=result.document_context,
    )


@dataclass
class ExtractionStats:
    total_sources: int
    file_count: int
    text_count: int
    qa_count: int
    total_characters: int
    average_length: int


class SourceExtractorService:
    """Application service for source extraction and vector record emission."""

    def __init__(
        self,
        source_repository: SourceRepository,
        chunker: SemanticChunkerService,
        settings: Settings | None = None,
    ):
        self._sources = source_repository
        self._chunker = chunker
        self._settings = settings or get_settings()

    # ── Extraction ───────────────────────────────────────────────────

    async def extract_all_sources_for_agent(self, agent_id: int) -> list[ExtractedSource]:
        """Extract trimmed content from every eligible source of an agent.

        Raises SourceExtractionError only when the source list itself cannot
        be read. Individual sources that fail are logged and skipped.
        """
        plog.step_start(PipelineStage.EXTRACT, "Extracting sources", agent_id=agent_id)

        try:
            sources = await self._sources.get_sources_for_agent(agent_id)
        except Exception as e:
            plog.step_error(PipelineStage.ERROR, f"Failed to list sources for agent {agent_id}", error=e)
            raise SourceExtractionError(agent_id, str(e)) from e

        eligible = [s for s in sources if s.is_eligible_for_embedding()]
        plog.detail(f"Found {len(eligible)} eligible sources", agent_id=agent_id, registered=len(sources))

        extracted: list[ExtractedSource] = []
        for source in eligible:
            if source.source_type not in EXTRACTABLE_SOURCE_TYPES:
                logger.warning(
                    "Unsupported source type '%s' for source %s — only %s sources are processed",
                    source.source_type,
                    source.id,
                    ", ".join(sorted(EXTRACTABLE_SOURCE_TYPES)),
                )
                continue

            try:
                item = await self._extract_source(source)
            except Exception as e:
                logger.warning("Failed to extract %s source %s: %s", source.source_type, source.id, e)
                continue

            if item is None:
                logger.warning("No content found for %s source %s", source.source_type, source.id)
                continue

            extracted.append(item)
            plog.detail(f"Extracted {source.source_type} source", source_id=source.id, chars=len(item.content))

        plog.step_complete(PipelineStage.EXTRACT, f"Extracted {len(extracted)} sources", agent_id=agent_id)
        return extracted

    async def _extract_source(self, source: KnowledgeSource) -> ExtractedSource | None:
        raw = await self._sources.get_raw_text(source.id)
        if raw is None:
            raise SourceNotFoundError(source.id)

        content = raw.strip()
        if not content:
            return None

        type_metadata = await self._get_type_metadata(source.id, source.source_type)
        return ExtractedSource(
            source_id=source.id,
            source_type=source.source_type,
            content=content,
            name=source.name,
            description=source.description,
            status=source.status,
            created_at=source.created_at,
            updated_at=source.updated_at,
            file_size=type_metadata.get("file_size"),
            url=type_metadata.get("url"),
        )

    async def _get_type_metadata(self, source_id: int, source_type: str) -> dict[str, Any]:
        """Per-type metadata lookup; any failure degrades to an empty dict."""
        try:
            return await self._sources.get_type_metadata(source_id, source_type) or {}
        except Exception as e:
            logger.debug("Metadata lookup failed for source %s: %s", source_id, e)
            return {}

    # ── Transformation ───────────────────────────────────────────────

    def production_chunking_config(self) -> ChunkingConfig:
        """Chunking settings used when vectorizing sources."""
        return ChunkingConfig(
            strategy=ChunkingStrategy.SEMANTIC,
            min_chunk_size=self._settings.vectorize_min_chunk_size,
            max_chunk_size=self._settings.vectorize_max_chunk_size,
            enable_overlap=True,
            overlap_percentage=self._settings.vectorize_overlap_percentage,
            preserve_research_projects=True,
            research_project_names=tuple(n.lower() for n in self._settings.chunking_research_project_names),
            enhance_semantic_boundaries=True,
            technical_keywords=tuple(self._settings.chunking_technical_keywords),
        )

    async def transform_to_vector_format(
        self,
        agent_id: int,
        extracted_sources: list[ExtractedSource],
    ) -> list[VectorRecord]:
        """Chunk, filter and score every extracted source into vector records.

        Content above the semantic threshold goes through the semantic
        chunker; shorter content uses fixed-size chunking. When chunking a
        source fails, a single fallback record holding its whole content is
        emitted instead.
        """
        plog.step_start(
            PipelineStage.VECTORIZE,
            f"Transforming {len(extracted_sources)} sources to vector format",
            agent_id=agent_id,
        )

        records: list[VectorRecord] = []
        for source in extracted_sources:
            try:
                if len(source.content) > self._settings.vectorize_semantic_threshold:
                    source_records = await self._semantic_records(agent_id, source)
                else:
                    source_records = self._fixed_size_records(agent_id, source)
            except Exception as e:
                plog.step_error(PipelineStage.ERROR, f"Failed to chunk source {source.source_id}", error=e)
                source_records = [self._fallback_record(agent_id, source)]
            records.extend(source_records)

        plog.step_complete(PipelineStage.VECTORIZE, f"Transformed to {len(records)} vector records")
        return records

    async def _semantic_records(self, agent_id: int, source: ExtractedSource) -> list[VectorRecord]:
        with plog.timed_step(PipelineStage.CHUNKING, f"Chunking '{source.name}'", source_id=source.source_id):
            raw = await self._chunker.chunk_text(
                source.content,
                self.production_chunking_config(),
                source.source_id,
                source.source_type,
                source.name,
            )
        result = filter_noise_chunks(raw)
        plog.stats(
            chunks=result.stats.total_chunks,
            noise_dropped=raw.stats.total_chunks - result.stats.total_chunks,
            avg_chars=result.stats.average_chunk_size,
        )

        freshness, authority = self._scores(source)
        total = len(result.chunks)
        records = []
        for index, (chunk, meta) in enumerate(zip(result.chunks, result.metadata)):
            context = build_chunk_context(result.document_context, result.chunks, index) if result.document_context else None
            records.append(
                VectorRecord(
                    id=f"agent_{agent_id}_{source.source_type}_source_{source.source_id}_chunk_{index}",
                    text=chunk,
                    chunk_index=index,
                    total_chunks=total,
                    chunk_position=ChunkPosition.for_index(index, total),
                    chunking_strategy=meta.strategy,
                    has_overlap_prefix=meta.has_overlap_prefix,
                    overlap_prefix_length=meta.overlap_prefix_length,
                    overlap_strategy=meta.overlap_strategy,
                    content_freshness=freshness,
                    content_authority=authority,
                    contains_key_facts=meta.contains_key_facts,
                    fact_types=tuple(meta.fact_types),
                    document_title=context.document_title if context else None,
                    section_title=context.section_title if context else None,
                    **self._provenance(source),
                )
            )

        plog.detail(f"Semantic chunking: {source.name} -> {total} chunks")
        return records

    def _fixed_size_records(self, agent_id: int, source: ExtractedSource) -> list[VectorRecord]:
        chunks = chunk_fixed_size(source.content, self._settings.vectorize_fixed_chunk_size)
        freshness, authority = self._scores(source)
        total = len(chunks)
        base_id = f"agent_{agent_id}_{source.source_type}_source_{source.source_id}"

        records = [
            VectorRecord(
                id=f"{base_id}_chunk_{index + 1}" if total > 1 else base_id,
                text=chunk,
                chunk_index=index,
                total_chunks=total,
                chunk_position=ChunkPosition.for_index(index, total),
                chunking_strategy="fixed_size",
                chunk_quality=_FALLBACK_SCORE,
                chunk_density=_FALLBACK_SCORE,
                content_relevance=_FALLBACK_SCORE,
                content_freshness=freshness,
                content_authority=authority,
                **self._provenance(source),
            )
            for index, chunk in enumerate(chunks)
        ]
        plog.detail(f"Fixed chunking: {source.name} -> {total} chunks")
        return records

    def _fallback_record(self, agent_id: int, source: ExtractedSource) -> VectorRecord:
        return VectorRecord(
            id=f"agent_{agent_id}_{source.source_type}_source_{source.source_id}_fallback",
            text=source.content,
            chunk_index=0,
            total_chunks=1,
            chunk_position=ChunkPosition.START,
            chunking_strategy="fallback",
            **self._provenance(source),
        )

    @staticmethod
    def _scores(source: ExtractedSource) -> tuple[float, float]:
        freshness = calculate_content_freshness(source.created_at, source.updated_at)
        authority = calculate_content_authority(source.source_type, source.status, bool(source.description))
        plog.step_complete(
            PipelineStage.SCORING,
            f"Scored '{source.name}'",
            freshness=f"{freshness:.2f}",
            authority=f"{authority:.2f}",
        )
        return freshness, authority

    @staticmethod
    def _provenance(source: ExtractedSource) -> dict[str, Any]:
        return {
            "category": source.source_type,
            "source_id": source.source_id,
            "source_type": source.source_type,
            "source_name": source.name,
            "source_description": source.description or NO_DESCRIPTION,
            "source_status": source.status,
            "source_created_at": source.created_at.isoformat(),
            "source_updated_at": source.updated_at.isoformat(),
            "source_file_size": source.file_size or 0,
            "source_url": source.url,
        }

    # ── Validation & stats ───────────────────────────────────────────

    def validate_extracted_content(
        self, extracted_sources: list[ExtractedSource]
    ) -> tuple[list[ExtractedSource], list[ExtractedSource]]:
        """Split sources into (valid, invalid); content must have at least 10 non-blank characters."""
        valid: list[ExtractedSource] = []
        invalid: list[ExtractedSource] = []
        for source in extracted_sources:
            if len(source.content.strip()) >= _MIN_VALID_CONTENT_CHARS:
                valid.append(source)
            else:
                invalid.append(source)
                logger.warning("Invalid content for source %s: too short or empty", source.source_id)

        logger.info("Content validation: %d valid, %d invalid", len(valid), len(invalid))
        return valid, invalid

    @staticmethod
    def get_extraction_stats(extracted_sources: list[ExtractedSource]) -> ExtractionStats:
        total_chars = sum(len(s.content) for s in extracted_sources)
        total = len(extracted_sources)
        return ExtractionStats(
            total_sources=total,
            file_count=sum(1 for s in extracted_sources if s.source_type == "file"),
            text_count=sum(1 for s in extracted_sources if s.source_type == "text"),
            qa_count=sum(1 for s in extracted_sources if s.source_type == "qa"),
            total_characters=total_chars,
            average_length=round(total_chars / total) if total else 0,
        )

    # ── Persistence confirmation ─────────────────────────────────────

    async def mark_sources_as_embedded(self, source_ids: list[int]) -> int:
        """Flag sources as embedded once their records are durably stored."""
        if not source_ids:
            return 0
        count = await self._sources.mark_embedded(source_ids)
        plog.step_complete(PipelineStage.STORE, f"Marked {len(source_ids)} sources as embedded")
        return count
