"""Domain entities for knowledge sources — the raw material fed to the vector index."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class SourceType(str, Enum):
    """Kinds of knowledge source an agent can own."""

    FILE = "file"
    WEBSITE = "website"
    TEXT = "text"
    QA = "qa"


class SourceStatus(str, Enum):
    """Lifecycle states of a knowledge source."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


# Only these source types are turned into vector records today.
EXTRACTABLE_SOURCE_TYPES = frozenset({SourceType.FILE.value})


@dataclass
class KnowledgeSource:
    """A registered knowledge source as stored in the source registry."""

    id: int
    agent_id: int
    source_type: str
    name: str
    description: str | None = None
    status: str = SourceStatus.PENDING.value
    is_deleted: bool = False
    is_embedded: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_eligible_for_embedding(self) -> bool:
        """Not deleted, not yet embedded, and pending or completed."""
        return (
            not self.is_deleted
            and not self.is_embedded
            and self.status in (SourceStatus.PENDING.value, SourceStatus.COMPLETED.value)
        )


@dataclass(frozen=True)
class ExtractedSource:
    """One source's trimmed raw content plus the identity needed downstream."""

    source_id: int
    source_type: str
    content: str
    name: str
    status: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    file_size: int | None = None
    url: str | None = None
