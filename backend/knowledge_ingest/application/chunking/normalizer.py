"""Size normalization — split oversized segments, coalesce undersized ones."""

from knowledge_ingest.application.chunking.sentences import split_sentences
from knowledge_ingest.domain.entities import SizeBounds

_COALESCE_SEPARATOR = "\n\n"


def finalize_segment(segment: str, bounds: SizeBounds) -> list[str]:
    """Turn one raw segment into chunks that respect the size bounds.

    A segment within ``max_size`` is returned unchanged. Larger segments are
    re-assembled greedily from sentences: a part is closed only once it has
    reached ``min_size``, so the maximum is soft while the minimum is a hard
    floor. Parts still under the minimum (a short trailing remainder) are
    dropped.
    """
    if len(segment) <= bounds.max_size:
        return [segment]

    parts: list[str] = []
    current = ""
    for sentence in split_sentences(segment):
        candidate = f"{current} {sentence}" if current else sentence
        if len(candidate) > bounds.max_size and len(current) >= bounds.min_size:
            parts.append(current.strip())
            current = sentence
        else:
            current = candidate

    if current.strip():
        parts.append(current.strip())

    return [part for part in parts if len(part) >= bounds.min_size]


def coalesce_small_segments(chunks: list[str], min_size: int) -> list[str]:
    """Merge chunks below ``min_size`` into their neighbours.

    Undersized chunks accumulate in a pending buffer until it clears the
    minimum. A pending buffer followed by a full-size chunk is merged into
    that chunk. A trailing pending buffer that never reaches the minimum is
    emitted as-is. The minimum wins over the maximum: a merged chunk can
    exceed ``max_chunk_size`` by the size of the pending buffer.
    """
    result: list[str] = []
    pending = ""

    for chunk in chunks:
        if not chunk:
            continue
        if len(chunk) >= min_size:
            if pending:
                result.append(f"{pending}{_COALESCE_SEPARATOR}{chunk}".strip())
                pending = ""
            else:
                result.append(chunk)
            continue

        pending = f"{pending}{_COALESCE_SEPARATOR}{chunk}" if pending else chunk
        if len(pending) >= min_size:
            result.append(pending.strip())
            pending = ""

    if pending.strip():
        # A trailing remainder stays its own chunk even when under the minimum.
        result.append(pending.strip())

    return result
