"""Integration tests for the agent training endpoint, with the pipeline's ports faked."""

import pytest
from httpx import ASGITransport, AsyncClient

from knowledge_ingest.application.interfaces import SourceRepository, VectorIndex
from knowledge_ingest.application.services import (
    KnowledgeTrainingService,
    SemanticChunkerService,
    SourceExtractorService,
)
from knowledge_ingest.config import Settings
from knowledge_ingest.domain.entities import KnowledgeSource
from knowledge_ingest.infrastructure.dependencies import get_knowledge_training_service
from knowledge_ingest.main import app


class InMemorySourceRepository(SourceRepository):
    def __init__(self, texts: dict[int, str], fail_listing: bool = False):
        self.texts = texts
        self.fail_listing = fail_listing
        self.marked: list[int] = []

    async def get_sources_for_agent(self, agent_id):
        if self.fail_listing:
            raise ConnectionError("registry down")
        return [KnowledgeSource(id=sid, agent_id=agent_id, source_type="file", name="n.txt") for sid in self.texts]

    async def get_raw_text(self, source_id):
        return self.texts.get(source_id)

    async def get_type_metadata(self, source_id, source_type):
        return {}

    async def mark_embedded(self, source_ids):
        self.marked.extend(source_ids)
        return len(source_ids)


class InMemoryVectorIndex(VectorIndex):
    def __init__(self):
        self.records = {}

    async def upsert_records(self, records, *, agent_id):
        self.records.update({r.id: r for r in records})
        return len(records)


def _override(repository: SourceRepository, index: VectorIndex):
    settings = Settings()
    service = KnowledgeTrainingService(
        SourceExtractorService(repository, SemanticChunkerService(settings=settings), settings),
        index,
    )
    app.dependency_overrides[get_knowledge_training_service] = lambda: service


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


async def _train(agent_id: int):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post(f"/api/v1/agents/{agent_id}/train")


@pytest.mark.asyncio
async def test_training_stores_and_marks_sources():
    repository = InMemorySourceRepository({1: "Warehouse robots note.", 2: "Second short note."})
    index = InMemoryVectorIndex()
    _override(repository, index)

    response = await _train(3)

    assert response.status_code == 200
    data = response.json()
    assert data["processed_sources"] == 2
    assert data["records_stored"] == 2
    assert repository.marked == [1, 2]
    assert "agent_3_file_source_1" in index.records


@pytest.mark.asyncio
async def test_no_eligible_sources_is_not_an_error():
    _override(InMemorySourceRepository({}), InMemoryVectorIndex())

    response = await _train(3)

    assert response.status_code == 200
    assert response.json()["message"] == "No eligible sources to train"


@pytest.mark.asyncio
async def test_unreadable_source_list_maps_to_502():
    _override(InMemorySourceRepository({}, fail_listing=True), InMemoryVectorIndex())

    response = await _train(3)

    assert response.status_code == 502
