from .chunking_config import (
    ChunkingConfig,
    ChunkingStrategy,
    ContentTransitions,
    ContentType,
    FactTypeKeywords,
    SizeBounds,
    SizeMultipliers,
)
from .chunking_result import (
    ChunkContext,
    ChunkingResult,
    ChunkingStats,
    ChunkMetadata,
    ChunkPosition,
    DocumentContext,
    OverlappedChunk,
    OverlapStrategy,
)
from .knowledge_source import (
    EXTRACTABLE_SOURCE_TYPES,
    ExtractedSource,
    KnowledgeSource,
    SourceStatus,
    SourceType,
)
from .vector_record import NO_DESCRIPTION, TrainingOutcome, VectorRecord

__all__ = [
    "ChunkingConfig",
    "ChunkingStrategy",
    "ContentTransitions",
    "ContentType",
    "FactTypeKeywords",
    "SizeBounds",
    "SizeMultipliers",
    "ChunkContext",
    "ChunkingResult",
    "ChunkingStats",
    "ChunkMetadata",
    "ChunkPosition",
    "DocumentContext",
    "OverlappedChunk",
    "OverlapStrategy",
    "EXTRACTABLE_SOURCE_TYPES",
    "ExtractedSource",
    "KnowledgeSource",
    "SourceStatus",
    "SourceType",
    "NO_DESCRIPTION",
    "TrainingOutcome",
    "VectorRecord",
]
