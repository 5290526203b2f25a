"""Declarative base shared by the source registry and vector record models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for the ingest ORM models; ``Base.metadata`` drives table creation at startup."""
