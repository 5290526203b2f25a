"""Pydantic schemas for the chunking preview API."""

from typing import Any

from pydantic import BaseModel, Field

from knowledge_ingest.domain.entities import ChunkingStrategy, ChunkPosition, OverlapStrategy


# ── Request ──────────────────────────────────────────────────────────


class ChunkingOverrides(BaseModel):
    """Partial chunking configuration; unset fields fall back to the system defaults."""

    strategy: ChunkingStrategy | None = None
    min_chunk_size: int | None = None
    max_chunk_size: int | None = None
    enable_overlap: bool | None = None
    overlap_percentage: int | None = None
    preserve_research_projects: bool | None = None
    research_project_names: list[str] | None = None
    enhance_semantic_boundaries: bool | None = None
    technical_keywords: list[str] | None = None
    fact_type_keywords: dict[str, list[str]] | None = None
    content_transitions: dict[str, list[str]] | None = None
    enable_hierarchical: bool | None = None
    enable_content_aware: bool | None = None
    hierarchical_summary_size: int | None = None
    size_multipliers: dict[str, float] | None = None


class ChunkingPreviewRequest(BaseModel):
    """Request body for chunking a text without storing anything."""

    text: str
    config: ChunkingOverrides | None = None
    source_id: int | None = None
    source_type: str | None = None
    source_name: str | None = None

    def overrides(self) -> dict[str, Any] | None:
        if self.config is None:
            return None
        return self.config.model_dump(exclude_none=True)


# ── Response ─────────────────────────────────────────────────────────


class ChunkMetadataSchema(BaseModel):
    chunk_index: int
    start_position: int
    end_position: int
    strategy: str
    contains_key_facts: bool
    fact_types: list[str] = Field(default_factory=list)
    overlap_strategy: OverlapStrategy | None = None
    overlap_prefix_length: int = 0
    has_overlap_prefix: bool = False


class ChunkingStatsSchema(BaseModel):
    total_chunks: int
    average_chunk_size: int
    processing_time_ms: int


class DocumentContextSchema(BaseModel):
    title: str | None = None
    summary: str | None = None
    section_titles: list[str] = Field(default_factory=list)
    word_count: int = 0


class ChunkContextSchema(BaseModel):
    chunk_position: ChunkPosition
    document_title: str | None = None
    section_title: str | None = None
    preceding_context: str | None = None
    following_context: str | None = None


class ChunkingPreviewResponse(BaseModel):
    """Chunks with their metadata, as the vectorizer would see them."""

    chunks: list[str]
    metadata: list[ChunkMetadataSchema]
    stats: ChunkingStatsSchema
    document_context: DocumentContextSchema | None = None
    chunk_contexts: list[ChunkContextSchema] = Field(default_factory=list)
