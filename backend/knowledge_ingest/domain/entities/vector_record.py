"""Domain entities for vector-ready records and the outcome of a training run."""

from dataclasses import asdict, dataclass, field
from typing import Any

from .chunking_result import ChunkPosition, OverlapStrategy

NO_DESCRIPTION = "No description available"


@dataclass(frozen=True)
class VectorRecord:
    """One chunk ready for embedding, with provenance and retrieval-scoring metadata.

    Identity is deterministic per (agent, source, chunk) so re-processing a
    source overwrites its previous records instead of duplicating them.
    """

    id: str
    text: str
    category: str
    source_id: int
    source_type: str
    chunk_index: int
    total_chunks: int
    chunk_position: ChunkPosition
    chunking_strategy: str
    source_name: str
    source_status: str
    source_created_at: str
    source_updated_at: str
    source_description: str = NO_DESCRIPTION
    source_file_size: int = 0
    source_url: str | None = None
    # Overlap provenance
    has_overlap_prefix: bool = False
    overlap_prefix_length: int = 0
    overlap_strategy: OverlapStrategy | None = None
    # Retrieval scoring (0.0 – 1.0)
    content_freshness: float | None = None
    content_authority: float | None = None
    chunk_quality: float | None = None     # fixed-size fallback path only
    chunk_density: float | None = None
    content_relevance: float | None = None
    # Advisory fact tags
    contains_key_facts: bool = False
    fact_types: tuple[str, ...] = ()
    # Document context
    document_title: str | None = None
    section_title: str | None = None

    def to_metadata(self) -> dict[str, Any]:
        """Flat metadata dict for the vector index — drops the text and unset fields."""
        data = asdict(self)
        data.pop("id")
        data.pop("text")
        data["chunk_position"] = self.chunk_position.value
        data["overlap_strategy"] = self.overlap_strategy.value if self.overlap_strategy else None
        data["fact_types"] = list(self.fact_types)
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class TrainingOutcome:
    """Result of running extraction + vectorization for one agent."""

    agent_id: int
    processed_source_ids: list[int] = field(default_factory=list)
    failed_source_ids: list[int] = field(default_factory=list)
    records_stored: int = 0
    no_eligible_sources: bool = False

    @property
    def processed_sources(self) -> int:
        return len(self.processed_source_ids)

    @property
    def failed_sources(self) -> int:
        return len(self.failed_source_ids)
