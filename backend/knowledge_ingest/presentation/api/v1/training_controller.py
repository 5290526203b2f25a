"""Training API controller — vectorize an agent's pending knowledge sources."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from knowledge_ingest.application.schemas import TrainingResponse
from knowledge_ingest.application.services import KnowledgeTrainingService
from knowledge_ingest.domain.exceptions import SourceExtractionError, VectorStorageError
from knowledge_ingest.infrastructure.dependencies import get_knowledge_training_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agents", tags=["Training"])


@router.post("/{agent_id}/train", response_model=TrainingResponse)
async def train_agent(
    agent_id: int,
    service: KnowledgeTrainingService = Depends(get_knowledge_training_service),
) -> TrainingResponse:
    """Extract, chunk, embed and store every eligible source of the agent."""
    try:
        outcome = await service.train_agent(agent_id)
    except (SourceExtractionError, VectorStorageError) as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    if outcome.no_eligible_sources:
        message = "No eligible sources to train"
    else:
        message = f"Trained {outcome.processed_sources} sources into {outcome.records_stored} records"

    return TrainingResponse(
        agent_id=outcome.agent_id,
        processed_sources=outcome.processed_sources,
        failed_sources=outcome.failed_sources,
        records_stored=outcome.records_stored,
        processed_source_ids=outcome.processed_source_ids,
        failed_source_ids=outcome.failed_source_ids,
        message=message,
    )
