"""Unit tests for structural segmentation and size normalization."""

import pytest

from knowledge_ingest.application.chunking import (
    coalesce_small_segments,
    finalize_segment,
    scan_segments,
    semantic_chunks,
)
from knowledge_ingest.application.chunking.segmenter import ScanState, advance
from knowledge_ingest.domain.entities import ChunkingConfig, SizeBounds


@pytest.fixture
def config() -> ChunkingConfig:
    return ChunkingConfig(min_chunk_size=100, max_chunk_size=300)


def _document() -> str:
    sections = []
    for name in ("Alpha", "Beta", "Gamma", "Delta"):
        body = " ".join(f"{name} paragraph sentence number {i} talks of shipping." for i in range(8))
        sections.append(f"# {name}\n{body}\n\nA short closing line for {name}.")
    return "\n".join(sections)


# ── advance ──


def test_major_break_flushes_buffer_and_starts_new_segment(config):
    state, emitted = advance(ScanState("Some earlier text.\n"), "# Heading", config)
    assert emitted == ("Some earlier text.",)
    assert state.buffer == "# Heading\n"


def test_major_break_on_empty_buffer_emits_nothing(config):
    state, emitted = advance(ScanState(), "# Heading", config)
    assert emitted == ()
    assert state.buffer == "# Heading\n"


def test_research_section_is_split_from_unrelated_text(config):
    state, emitted = advance(ScanState("We sell shoes.\n"), "Project Atlas research began", config)
    assert emitted == ("We sell shoes.",)
    assert state.buffer == "Project Atlas research began\n"


def test_research_section_stays_with_research_context(config):
    state, emitted = advance(ScanState("Our research lab.\n"), "Project Atlas research began", config)
    assert emitted == ()
    assert state.buffer == "Our research lab.\nProject Atlas research began\n"


def test_buffer_is_flushed_past_overflow_limit(config):
    state, emitted = advance(ScanState("x" * 445 + "\n"), "more words", config)
    assert len(emitted) == 1
    assert emitted[0].endswith("more words")
    assert not state.has_content


def test_scan_segments_splits_on_headings(config):
    segments = scan_segments("# One\nfirst body\n# Two\nsecond body", config)
    assert segments == ["# One\nfirst body", "# Two\nsecond body"]


# ── finalize_segment ──


def test_segment_within_max_is_returned_unchanged():
    assert finalize_segment("tiny", SizeBounds(20, 50)) == ["tiny"]


def test_oversized_segment_is_regrouped_by_sentence():
    segment = "Aaaa aaaa aaaa aaaa. Bbbb bbbb bbbb bbbb. Cccc cccc cccc cccc. D."
    parts = finalize_segment(segment, SizeBounds(20, 50))
    assert parts == ["Aaaa aaaa aaaa aaaa. Bbbb bbbb bbbb bbbb.", "Cccc cccc cccc cccc. D."]


def test_undersized_remainder_of_split_segment_is_dropped():
    segment = "Aaaa aaaa aaaa aaaa. Bbbb bbbb bbbb bbbb. Cccc cccc cccc cccc. D."
    assert finalize_segment(segment, SizeBounds(30, 50)) == ["Aaaa aaaa aaaa aaaa. Bbbb bbbb bbbb bbbb."]


# ── coalesce_small_segments ──


def test_small_chunks_accumulate_until_minimum():
    result = coalesce_small_segments(["a" * 30, "b" * 30, "c" * 50], 100)
    assert result == ["a" * 30 + "\n\n" + "b" * 30 + "\n\n" + "c" * 50]


def test_pending_buffer_merges_into_following_full_chunk():
    assert coalesce_small_segments(["a" * 30, "b" * 150], 100) == ["a" * 30 + "\n\n" + "b" * 150]


def test_trailing_remainder_below_minimum_is_kept():
    # Known boundary case: a short tail has no successor to merge into.
    assert coalesce_small_segments(["x" * 150, "y" * 20], 100) == ["x" * 150, "y" * 20]


def test_empty_chunks_are_ignored():
    assert coalesce_small_segments(["", "z" * 120, ""], 100) == ["z" * 120]


def test_pending_merge_may_exceed_maximum_to_keep_the_minimum():
    """Merging a short lead-in into the next full chunk lets that chunk pass max_chunk_size."""
    chunks = coalesce_small_segments(["Tiny.", "x" * 297, "y" * 297], 100)

    assert chunks == [f"Tiny.\n\n{'x' * 297}", "y" * 297]
    assert len(chunks[0]) > 300


# ── semantic_chunks ──


def test_every_chunk_but_the_last_meets_the_minimum(config):
    chunks = semantic_chunks(_document(), config)
    assert len(chunks) > 1
    assert all(len(c) >= config.min_chunk_size for c in chunks[:-1])


def test_chunks_may_exceed_the_maximum_only_by_a_merged_pending_buffer(config):
    """The maximum is soft: a chunk can grow past it by at most one coalesced under-minimum buffer."""
    chunks = semantic_chunks(_document(), config)
    assert all(len(c) <= config.max_chunk_size + config.min_chunk_size + 2 for c in chunks)


def test_no_chunk_is_blank(config):
    assert all(c.strip() for c in semantic_chunks(_document(), config))


def test_empty_text_produces_no_chunks(config):
    assert semantic_chunks("", config) == []
    assert semantic_chunks("\n\n   \n", config) == []
