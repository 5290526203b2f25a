"""Unit tests for overlap strategy selection and injection."""

import pytest

from knowledge_ingest.application.chunking import apply_overlap, select_overlap_strategy
from knowledge_ingest.application.chunking.overlap import overlap_text_for
from knowledge_ingest.domain.entities import ChunkingConfig, OverlapStrategy


@pytest.fixture
def config() -> ChunkingConfig:
    return ChunkingConfig()


def test_project_and_research_across_the_pair_selects_concept(config):
    strategy = select_overlap_strategy("Project Atlas started.", "The research continues.", config)
    assert strategy == OverlapStrategy.CONCEPT


def test_technical_vocabulary_selects_sentence(config):
    assert select_overlap_strategy("Our system is fast.", "Cats.", config) == OverlapStrategy.SENTENCE


def test_plain_text_selects_minimal(config):
    assert select_overlap_strategy("We sell shoes.", "They are red.", config) == OverlapStrategy.MINIMAL


def test_minimal_overlap_takes_last_sentence(config):
    text, strategy = overlap_text_for("One thing. Two things. Three things.", "Next part here.", config)
    assert strategy == OverlapStrategy.MINIMAL
    assert text == "Three things."


@pytest.mark.parametrize(("percentage", "expected"), [(25, "It is simple."), (50, "It is cheap. It is simple.")])
def test_sentence_overlap_scales_with_percentage(percentage, expected):
    config = ChunkingConfig(overlap_percentage=percentage)
    previous = "The system is fast. It scales well. It is cheap. It is simple."
    text, strategy = overlap_text_for(previous, "Next chunk text.", config)
    assert strategy == OverlapStrategy.SENTENCE
    assert text == expected


def test_concept_overlap_keeps_sentences_sharing_vocabulary(config):
    previous = "Project Atlas began in 2020. Funding was secured. The atlas team expanded."
    text, strategy = overlap_text_for(previous, "Research on atlas continues.", config)
    assert strategy == OverlapStrategy.CONCEPT
    assert text == "Project Atlas began in 2020. The atlas team expanded."


def test_concept_overlap_without_shared_vocabulary_uses_tail(config):
    previous = "Project one. Project two. Project three."
    text, _ = overlap_text_for(previous, "Research notes.", config)
    assert text == "Project two. Project three."


def test_first_chunk_is_untouched_and_bodies_are_preserved(config):
    chunks = ["We sell shoes. They are red.", "Our stores open daily.", "Prices are low."]
    overlapped = apply_overlap(chunks, config)

    assert overlapped[0].text == chunks[0]
    assert overlapped[0].overlap_text == ""
    assert [o.body for o in overlapped] == chunks
    for o in overlapped[1:]:
        assert o.text.endswith(o.body)
        assert len(o.text) >= len(o.body)


def test_overlap_is_taken_from_predecessor_body_only(config):
    overlapped = apply_overlap(["Alpha one. Alpha two.", "Beta one.", "Gamma one."], config)
    assert overlapped[1].overlap_text == "Alpha two."
    assert overlapped[2].overlap_text == "Beta one."
    assert overlapped[2].text == "Beta one. Gamma one."


def test_disabled_overlap_returns_plain_chunks():
    config = ChunkingConfig(enable_overlap=False)
    overlapped = apply_overlap(["One.", "Two."], config)
    assert [o.text for o in overlapped] == ["One.", "Two."]
    assert all(o.strategy is None for o in overlapped)
