"""Domain entities produced by the chunking engine."""

from dataclasses import dataclass, field
from enum import Enum


class ChunkPosition(str, Enum):
    """Where a chunk sits within its document."""

    START = "start"
    MIDDLE = "middle"
    END = "end"

    @classmethod
    def for_index(cls, index: int, total: int) -> "ChunkPosition":
        if index == 0:
            return cls.START
        if index == total - 1:
            return cls.END
        return cls.MIDDLE


class OverlapStrategy(str, Enum):
    """How context from the previous chunk was selected."""

    CONCEPT = "concept"
    SENTENCE = "sentence"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class OverlappedChunk:
    """A chunk body together with the context prepended from its predecessor."""

    body: str
    overlap_text: str = ""
    strategy: OverlapStrategy | None = None

    @property
    def text(self) -> str:
        return f"{self.overlap_text} {self.body}" if self.overlap_text else self.body


@dataclass
class DocumentContext:
    """Document-level signals supplied by the context extractor."""

    title: str | None = None
    summary: str | None = None
    section_titles: list[str] = field(default_factory=list)
    word_count: int = 0


@dataclass
class ChunkContext:
    """Where one chunk sits inside its document, for retrieval display."""

    chunk_position: ChunkPosition
    document_title: str | None = None
    document_summary: str | None = None
    section_title: str | None = None
    preceding_context: str | None = None
    following_context: str | None = None


@dataclass
class ChunkMetadata:
    """Attributes attached 1:1 to a finished chunk."""

    chunk_index: int
    start_position: int     # first occurrence in the source text, -1 if not found
    end_position: int
    strategy: str
    contains_key_facts: bool = False
    fact_types: list[str] = field(default_factory=list)
    overlap_strategy: OverlapStrategy | None = None
    overlap_prefix_length: int = 0

    @property
    def has_overlap_prefix(self) -> bool:
        return self.overlap_prefix_length > 0


@dataclass
class ChunkingStats:
    """Summary statistics for one chunking run."""

    total_chunks: int
    average_chunk_size: int
    processing_time_ms: int


@dataclass
class ChunkingResult:
    """Chunks, their index-aligned metadata, and run statistics."""

    chunks: list[str]
    metadata: list[ChunkMetadata]
    stats: ChunkingStats
    document_context: DocumentContext | None = None

    def __post_init__(self) -> None:
        if len(self.chunks) != len(self.metadata):
            raise ValueError(
                f"chunks and metadata must align ({len(self.chunks)} != {len(self.metadata)})"
            )
