"""SQLAlchemy ORM model for stored vector records with pgvector embeddings."""

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text, func

from pgvector.sqlalchemy import Vector

from knowledge_ingest.infrastructure.database.base import Base

EMBEDDING_DIMENSIONS = 768  # HNSW max: 2000


class VectorRecordModel(Base):
    """One embedded chunk of a knowledge source.

    The primary key is the deterministic record id, so re-training a source
    overwrites its rows in place.
    """

    __tablename__ = "vector_records"

    id = Column(String(200), primary_key=True)
    agent_id = Column(Integer, nullable=False, index=True)
    source_id = Column(Integer, nullable=False, index=True)
    chunk_index = Column(Integer, nullable=False)
    text = Column(Text, nullable=False)
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_vector_records_embedding_hnsw", embedding, postgresql_using="hnsw",
              postgresql_ops={"embedding": "vector_cosine_ops"}),
    )
