"""Structural segmenter — folds lines into raw segments.

The scan is a fold over ``advance(state, line, config)``, a pure transition
that returns the next state and any segments flushed by that line. All break
conditions live in ``boundaries``; this module only orders them.
"""

from dataclasses import dataclass

from knowledge_ingest.application.chunking import boundaries
from knowledge_ingest.application.chunking.normalizer import (
    coalesce_small_segments,
    finalize_segment,
)
from knowledge_ingest.domain.entities import ChunkingConfig


@dataclass(frozen=True)
class ScanState:
    """Text accumulated since the last flush."""

    buffer: str = ""

    @property
    def has_content(self) -> bool:
        return bool(self.buffer.strip())


def _flush(state: ScanState) -> tuple[str, ...]:
    return (state.buffer.strip(),) if state.has_content else ()


def advance(state: ScanState, line: str, config: ChunkingConfig) -> tuple[ScanState, tuple[str, ...]]:
    """Consume one trimmed line; return the new state and the segments it flushed."""
    if boundaries.is_major_structural_break(line, config):
        return ScanState(line + "\n"), _flush(state)

    emitted: tuple[str, ...] = ()

    if (
        config.preserve_research_projects
        and boundaries.starts_research_section(line, config)
        and state.has_content
        and not boundaries.is_research_related(state.buffer, config)
    ):
        emitted += _flush(state)
        state = ScanState()

    if config.enhance_semantic_boundaries and boundaries.is_semantic_transition(state.buffer, line, config):
        emitted += _flush(state)
        state = ScanState()

    state = ScanState(state.buffer + line + "\n")

    if len(state.buffer) > config.max_chunk_size * config.size_multipliers.overflow:
        emitted += _flush(state)
        state = ScanState()

    return state, emitted


def scan_segments(text: str, config: ChunkingConfig) -> list[str]:
    """Fold every line of the text into raw (un-normalized) segments."""
    segments: list[str] = []
    state = ScanState()
    for raw_line in text.split("\n"):
        state, emitted = advance(state, raw_line.strip(), config)
        segments.extend(emitted)
    segments.extend(_flush(state))
    return segments


def semantic_chunks(text: str, config: ChunkingConfig) -> list[str]:
    """Structural segmentation followed by size normalization."""
    chunks: list[str] = []
    for segment in scan_segments(text, config):
        chunks.extend(finalize_segment(segment, config.bounds))
    return coalesce_small_segments(chunks, config.min_chunk_size)
