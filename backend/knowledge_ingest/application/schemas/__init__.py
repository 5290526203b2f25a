from .chunking import (
    ChunkContextSchema,
    ChunkingOverrides,
    ChunkingPreviewRequest,
    ChunkingPreviewResponse,
    ChunkingStatsSchema,
    ChunkMetadataSchema,
    DocumentContextSchema,
)
from .training import TrainingResponse

__all__ = [
    "ChunkContextSchema",
    "ChunkingOverrides",
    "ChunkingPreviewRequest",
    "ChunkingPreviewResponse",
    "ChunkingStatsSchema",
    "ChunkMetadataSchema",
    "DocumentContextSchema",
    "TrainingResponse",
]
