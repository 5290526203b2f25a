from .source_repository import SQLAlchemySourceRepository
from .vector_index import PgVectorIndex

__all__ = [
    "PgVectorIndex",
    "SQLAlchemySourceRepository",
]
