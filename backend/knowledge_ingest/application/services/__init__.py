from .knowledge_training_service import KnowledgeTrainingService
from .semantic_chunker_service import SemanticChunkerService
from .source_extractor_service import ExtractionStats, SourceExtractorService

__all__ = [
    "ExtractionStats",
    "KnowledgeTrainingService",
    "SemanticChunkerService",
    "SourceExtractorService",
]
