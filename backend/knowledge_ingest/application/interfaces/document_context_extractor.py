"""Abstract interface (port) for document-level context extraction."""

from abc import ABC, abstractmethod

from knowledge_ingest.domain.entities import DocumentContext


class DocumentContextExtractor(ABC):
    """Port for deriving a DocumentContext from a source's raw text."""

    @abstractmethod
    async def extract_context(
        self,
        source_id: int,
        source_type: str,
        text: str,
        source_name: str,
    ) -> DocumentContext:
        ...
