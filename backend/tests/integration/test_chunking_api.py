"""Integration tests for the chunking preview endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from knowledge_ingest.main import app

PARAGRAPH = " ".join(f"Sentence {i} describes the quarterly shipping figures in detail." for i in range(40))


async def _post(payload: dict):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post("/api/v1/chunking/preview", json=payload)


@pytest.mark.asyncio
async def test_preview_returns_chunks_with_aligned_metadata():
    response = await _post({"text": PARAGRAPH, "config": {"min_chunk_size": 200, "max_chunk_size": 600}})

    assert response.status_code == 200
    data = response.json()
    assert len(data["chunks"]) > 1
    assert len(data["metadata"]) == len(data["chunks"])
    assert data["stats"]["total_chunks"] == len(data["chunks"])
    assert data["metadata"][0]["has_overlap_prefix"] is False
    assert data["document_context"] is None


@pytest.mark.asyncio
async def test_preview_with_source_identity_includes_document_context():
    text = "# Shipping Report\n" + PARAGRAPH
    response = await _post(
        {
            "text": text,
            "config": {"min_chunk_size": 200, "max_chunk_size": 600},
            "source_id": 4,
            "source_type": "file",
            "source_name": "report.pdf",
        }
    )

    data = response.json()
    assert data["document_context"]["title"] == "Shipping Report"
    assert len(data["chunk_contexts"]) == len(data["chunks"])
    assert data["chunk_contexts"][0]["chunk_position"] == "start"


@pytest.mark.asyncio
async def test_invalid_bounds_are_rejected_with_422():
    response = await _post({"text": PARAGRAPH, "config": {"min_chunk_size": 900, "max_chunk_size": 400}})

    assert response.status_code == 422
    assert "min_chunk_size" in response.json()["detail"]


@pytest.mark.asyncio
async def test_unknown_strategy_fails_request_validation():
    response = await _post({"text": PARAGRAPH, "config": {"strategy": "fractal"}})
    assert response.status_code == 422
