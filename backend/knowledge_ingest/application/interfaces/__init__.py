from .document_context_extractor import DocumentContextExtractor
from .embedding_provider import EmbeddingProvider
from .source_repository import SourceRepository
from .vector_index import VectorIndex

__all__ = [
    "DocumentContextExtractor",
    "EmbeddingProvider",
    "SourceRepository",
    "VectorIndex",
]
