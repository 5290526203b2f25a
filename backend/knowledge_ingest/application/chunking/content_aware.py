"""Content-aware chunking — size windows adapted to each line's content type."""

import logging

from knowledge_ingest.application.chunking.boundaries import classify_line, is_major_structural_break
from knowledge_ingest.application.chunking.normalizer import coalesce_small_segments, finalize_segment
from knowledge_ingest.domain.entities import ChunkingConfig

logger = logging.getLogger(__name__)


def content_aware_chunks(text: str, config: ChunkingConfig) -> list[str]:
    """Chunk with per-line size bounds: smaller for technical and list content, larger for narrative."""
    chunks: list[str] = []
    buffer = ""

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        bounds = config.bounds_for(classify_line(line, config))
        should_break = len(buffer) > bounds.max_size or is_major_structural_break(line, config)
        if should_break and buffer.strip():
            chunks.extend(finalize_segment(buffer.strip(), bounds))
            buffer = ""

        buffer += line + "\n"

    if buffer.strip():
        chunks.extend(finalize_segment(buffer.strip(), config.bounds))

    logger.debug("Content-aware pass produced %d raw chunks", len(chunks))
    return coalesce_small_segments(chunks, config.min_chunk_size)
