"""Knowledge training service — runs extraction and vectorization for one agent.

Records are written to the vector index source by source. A source is only
marked as embedded after all of its records have been stored (or when none of
its chunks survived noise filtering), so a failed write leaves it eligible for
the next training run.
"""

import logging
from itertools import groupby

from knowledge_ingest.application.interfaces import VectorIndex
from knowledge_ingest.application.services.source_extractor_service import SourceExtractorService
from knowledge_ingest.domain.entities import TrainingOutcome, VectorRecord
from knowledge_ingest.domain.exceptions import VectorStorageError
from knowledge_ingest.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("KnowledgeTrainingService")


class KnowledgeTrainingService:
    """Orchestrates extract → transform → store → mark for an agent."""

    def __init__(self, extractor: SourceExtractorService, vector_index: VectorIndex):
        self._extractor = extractor
        self._index = vector_index

    async def train_agent(self, agent_id: int) -> TrainingOutcome:
        plog.separator(f"Training agent {agent_id}")
        outcome = TrainingOutcome(agent_id=agent_id)

        extracted = await self._extractor.extract_all_sources_for_agent(agent_id)
        if not extracted:
            plog.step_complete(PipelineStage.PIPELINE, "No eligible sources", agent_id=agent_id)
            outcome.no_eligible_sources = True
            return outcome

        valid, invalid = self._extractor.validate_extracted_content(extracted)
        outcome.failed_source_ids.extend(s.source_id for s in invalid)

        records = await self._extractor.transform_to_vector_format(agent_id, valid)
        records_by_source = {
            source_id: list(group) for source_id, group in groupby(records, key=lambda r: r.source_id)
        }

        for source in valid:
            source_records = records_by_source.get(source.source_id, [])
            if not source_records:
                # Every chunk was noise: the source is trained with zero records.
                plog.detail("No records survived noise filtering", source_id=source.source_id)
                outcome.processed_source_ids.append(source.source_id)
                continue
            stored = await self._store(agent_id, source.source_id, source_records)
            if stored is None:
                outcome.failed_source_ids.append(source.source_id)
                continue
            outcome.processed_source_ids.append(source.source_id)
            outcome.records_stored += stored

        if records and outcome.records_stored == 0:
            raise VectorStorageError(agent_id, "no records could be stored")
        if outcome.processed_source_ids:
            await self._extractor.mark_sources_as_embedded(outcome.processed_source_ids)

        plog.step_complete(
            PipelineStage.COMPLETE,
            f"Agent {agent_id} trained",
            processed=outcome.processed_sources,
            failed=outcome.failed_sources,
            records=outcome.records_stored,
        )
        return outcome

    async def _store(self, agent_id: int, source_id: int, records: list[VectorRecord]) -> int | None:
        """Write one source's records; returns the count, or None when the write failed."""
        try:
            with plog.timed_step(PipelineStage.STORE, f"Storing records for source {source_id}", records=len(records)):
                stored = await self._index.upsert_records(records, agent_id=agent_id)
        except Exception:
            # timed_step has already logged the failure
            return None
        plog.stats(source_id=source_id, stored=stored)
        return stored
