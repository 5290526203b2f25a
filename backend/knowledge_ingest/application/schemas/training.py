"""Pydantic schemas for the agent training API."""

from pydantic import BaseModel


class TrainingResponse(BaseModel):
    """Summary of one training run."""

    agent_id: int
    processed_sources: int
    failed_sources: int
    records_stored: int
    processed_source_ids: list[int]
    failed_source_ids: list[int]
    message: str
