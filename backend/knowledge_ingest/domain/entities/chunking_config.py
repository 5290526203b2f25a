"""Domain value objects describing how a document is chunked.

A ``ChunkingConfig`` is fully resolved (no unset fields) and immutable. Any
per-line size adjustment made by a strategy produces a new ``SizeBounds``
instead of touching the config.
"""

from dataclasses import dataclass, field
from enum import Enum

from knowledge_ingest.domain.exceptions import ChunkingConfigError


class ChunkingStrategy(str, Enum):
    """Chunking pipelines selectable through the config."""

    SEMANTIC = "semantic"
    HIERARCHICAL = "hierarchical"
    CONTENT_AWARE = "content-aware"


class ContentType(str, Enum):
    """Line classification used by content-aware chunking."""

    TECHNICAL = "technical"
    LIST = "list"
    HEADER = "header"
    NARRATIVE = "narrative"


@dataclass(frozen=True)
class FactTypeKeywords:
    """Keyword classes used to tag chunks with fact types."""

    company: tuple[str, ...] = ("founded", "company", "established", "incorporated", "headquarters")
    technical: tuple[str, ...] = ("technology", "specifications", "features", "architecture", "system", "platform")
    people: tuple[str, ...] = ("ceo", "founder", "chief", "executive", "director", "team")
    product: tuple[str, ...] = ("product", "service", "solution", "platform", "application")

    def as_pairs(self) -> tuple[tuple[str, tuple[str, ...]], ...]:
        """Keyword classes in tagging order."""
        return (
            ("company", self.company),
            ("technical", self.technical),
            ("people", self.people),
            ("product", self.product),
        )


@dataclass(frozen=True)
class ContentTransitions:
    """Vocabulary pairs that mark a forced semantic break between sections."""

    overview_to_research: tuple[str, ...] = ("overview", "introduction", "about", "background")
    research_to_products: tuple[str, ...] = ("research", "development", "projects", "products", "solutions")


@dataclass(frozen=True)
class SizeMultipliers:
    """Multipliers applied to the size bounds per content type."""

    technical: float = 0.8
    list: float = 0.6
    narrative: float = 1.2
    overflow: float = 1.5  # mid-scan hard flush at max_chunk_size * overflow


@dataclass(frozen=True)
class SizeBounds:
    """Minimum and maximum chunk length in characters."""

    min_size: int
    max_size: int


@dataclass(frozen=True)
class ChunkingConfig:
    """Fully resolved, immutable chunking configuration."""

    strategy: ChunkingStrategy = ChunkingStrategy.SEMANTIC
    min_chunk_size: int = 400
    max_chunk_size: int = 1200
    enable_overlap: bool = True
    overlap_percentage: int = 25
    preserve_research_projects: bool = True
    research_project_names: tuple[str, ...] = ()
    enhance_semantic_boundaries: bool = True
    technical_keywords: tuple[str, ...] = ("technology", "specifications", "features", "architecture", "system")
    fact_type_keywords: FactTypeKeywords = field(default_factory=FactTypeKeywords)
    content_transitions: ContentTransitions = field(default_factory=ContentTransitions)
    enable_hierarchical: bool = False
    enable_content_aware: bool = False
    hierarchical_summary_size: int = 300
    size_multipliers: SizeMultipliers = field(default_factory=SizeMultipliers)
    summary_size_ratio: float = 0.3
    min_summary_ratio: float = 0.5

    def __post_init__(self) -> None:
        if self.min_chunk_size <= 0:
            raise ChunkingConfigError("min_chunk_size", f"must be positive, got {self.min_chunk_size}")
        if self.min_chunk_size >= self.max_chunk_size:
            raise ChunkingConfigError(
                "min_chunk_size",
                f"must be smaller than max_chunk_size ({self.min_chunk_size} >= {self.max_chunk_size})",
            )
        if not 0 <= self.overlap_percentage <= 100:
            raise ChunkingConfigError(
                "overlap_percentage", f"must be between 0 and 100, got {self.overlap_percentage}"
            )
        if self.hierarchical_summary_size <= 0:
            raise ChunkingConfigError(
                "hierarchical_summary_size", f"must be positive, got {self.hierarchical_summary_size}"
            )
        if self.size_multipliers.overflow < 1:
            raise ChunkingConfigError(
                "size_multipliers.overflow", f"must be at least 1, got {self.size_multipliers.overflow}"
            )

    @property
    def bounds(self) -> SizeBounds:
        return SizeBounds(self.min_chunk_size, self.max_chunk_size)

    @property
    def effective_strategy(self) -> ChunkingStrategy:
        """The pipeline actually run — the enable_* flags override the selector."""
        if self.strategy == ChunkingStrategy.HIERARCHICAL or self.enable_hierarchical:
            return ChunkingStrategy.HIERARCHICAL
        if self.strategy == ChunkingStrategy.CONTENT_AWARE or self.enable_content_aware:
            return ChunkingStrategy.CONTENT_AWARE
        return ChunkingStrategy.SEMANTIC

    def bounds_for(self, content_type: ContentType) -> SizeBounds:
        """Derive size bounds for a line of the given content type."""
        m = self.size_multipliers
        if content_type == ContentType.TECHNICAL:
            return SizeBounds(int(self.min_chunk_size * m.technical), int(self.max_chunk_size * m.technical))
        if content_type == ContentType.LIST:
            return SizeBounds(int(self.min_chunk_size * m.list), int(self.max_chunk_size * m.list))
        if content_type == ContentType.NARRATIVE:
            return SizeBounds(self.min_chunk_size, int(self.max_chunk_size * m.narrative))
        return self.bounds
