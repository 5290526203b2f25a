"""Domain-specific exceptions — framework-independent."""


class ChunkingError(Exception):
    """Raised when a document cannot be chunked."""


class ChunkingConfigError(ChunkingError, ValueError):
    """Raised when a chunking configuration violates its bounds.

    Raised while the configuration is being resolved, before any text is processed.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid chunking config '{field}': {message}")


class SourceNotFoundError(Exception):
    """Raised when a knowledge source has no raw-text record."""

    def __init__(self, source_id: int | str):
        self.source_id = source_id
        super().__init__(f"File source not found for source ID {source_id}")


class SourceExtractionError(Exception):
    """Raised when the source list for an agent cannot be read at all."""

    def __init__(self, agent_id: int | str, message: str):
        self.agent_id = agent_id
        super().__init__(f"Failed to extract sources for agent {agent_id}: {message}")


class VectorStorageError(Exception):
    """Raised when vector records could not be stored in the vector index."""

    def __init__(self, agent_id: int | str, message: str):
        self.agent_id = agent_id
        super().__init__(f"Vector storage failed for agent {agent_id}: {message}")
