"""Unit tests for the SemanticChunkerService entry point."""

import pytest

from knowledge_ingest.application.interfaces import DocumentContextExtractor
from knowledge_ingest.application.services import SemanticChunkerService
from knowledge_ingest.config import Settings
from knowledge_ingest.domain.entities import ChunkingConfig, DocumentContext
from knowledge_ingest.domain.exceptions import ChunkingConfigError, ChunkingError


class FakeContextExtractor(DocumentContextExtractor):
    """Records calls and returns a fixed context."""

    def __init__(self):
        self.calls: list[tuple] = []

    async def extract_context(self, source_id, source_type, text, source_name) -> DocumentContext:
        self.calls.append((source_id, source_type, source_name))
        return DocumentContext(title="Fixed title", section_titles=["Intro"], word_count=len(text.split()))


class FailingContextExtractor(DocumentContextExtractor):
    async def extract_context(self, source_id, source_type, text, source_name) -> DocumentContext:
        raise RuntimeError("context store offline")


PARAGRAPH = " ".join(f"Sentence {i} describes the quarterly shipping figures in detail." for i in range(40))


@pytest.fixture
def service() -> SemanticChunkerService:
    return SemanticChunkerService(settings=Settings())


@pytest.mark.asyncio
async def test_empty_text_yields_empty_result(service: SemanticChunkerService):
    result = await service.chunk_text("")
    assert result.chunks == []
    assert result.metadata == []
    assert result.stats.total_chunks == 0
    assert result.stats.average_chunk_size == 0


@pytest.mark.asyncio
async def test_single_chunk_is_located_in_the_source(service: SemanticChunkerService):
    text = "Acme sells shoes.\nThey ship worldwide."
    result = await service.chunk_text(text)

    assert result.chunks == [text]
    meta = result.metadata[0]
    assert meta.chunk_index == 0
    assert meta.start_position == 0
    assert meta.end_position == len(text)
    assert meta.strategy == "semantic"
    assert not meta.has_overlap_prefix


@pytest.mark.asyncio
async def test_metadata_is_index_aligned_and_overlap_is_reported(service: SemanticChunkerService):
    result = await service.chunk_text(PARAGRAPH, {"min_chunk_size": 200, "max_chunk_size": 600})

    assert len(result.chunks) > 1
    assert len(result.metadata) == len(result.chunks)
    assert [m.chunk_index for m in result.metadata] == list(range(len(result.chunks)))
    assert result.metadata[0].overlap_prefix_length == 0
    assert all(m.has_overlap_prefix for m in result.metadata[1:])
    assert result.stats.total_chunks == len(result.chunks)
    assert result.stats.average_chunk_size == round(sum(map(len, result.chunks)) / len(result.chunks))


@pytest.mark.asyncio
async def test_invalid_config_fails_before_chunking(service: SemanticChunkerService):
    with pytest.raises(ChunkingConfigError):
        await service.chunk_text(PARAGRAPH, {"min_chunk_size": 500, "max_chunk_size": 400})


@pytest.mark.asyncio
async def test_hierarchical_strategy_emits_summary_and_detail_chunks(service: SemanticChunkerService):
    result = await service.chunk_text(
        PARAGRAPH, {"strategy": "hierarchical", "min_chunk_size": 200, "max_chunk_size": 600}
    )
    assert result.chunks[0].startswith("[SUMMARY] ") or result.chunks[0].startswith("[DETAIL] ")
    assert any("[DETAIL] " in c for c in result.chunks)
    assert {m.strategy for m in result.metadata} == {"hierarchical"}


@pytest.mark.asyncio
async def test_enable_flag_selects_content_aware(service: SemanticChunkerService):
    config = ChunkingConfig(min_chunk_size=200, max_chunk_size=600, enable_content_aware=True)
    result = await service.chunk_text(PARAGRAPH, config)
    assert {m.strategy for m in result.metadata} == {"content-aware"}


@pytest.mark.asyncio
async def test_document_context_requires_full_source_identity():
    extractor = FakeContextExtractor()
    service = SemanticChunkerService(context_extractor=extractor, settings=Settings())

    without = await service.chunk_text("Some text here.", source_id=3)
    with_identity = await service.chunk_text("Some text here.", None, 3, "file", "notes.txt")

    assert without.document_context is None
    assert with_identity.document_context.title == "Fixed title"
    assert extractor.calls == [(3, "file", "notes.txt")]


@pytest.mark.asyncio
async def test_unexpected_failures_are_wrapped():
    service = SemanticChunkerService(context_extractor=FailingContextExtractor(), settings=Settings())
    with pytest.raises(ChunkingError) as exc_info:
        await service.chunk_text("Some text here.", None, 3, "file", "notes.txt")
    assert not isinstance(exc_info.value, ChunkingConfigError)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_fact_tags_are_attached(service: SemanticChunkerService):
    result = await service.chunk_text("The company was founded in 1999 by our CEO.")
    assert result.metadata[0].contains_key_facts
    assert result.metadata[0].fact_types == ["company", "people"]
