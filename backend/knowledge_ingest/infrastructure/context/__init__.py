"""Document context extraction adapters."""

from .heuristic_document_context_extractor import HeuristicDocumentContextExtractor

__all__ = ["HeuristicDocumentContextExtractor"]
