"""Overlap injection — prepend context from each chunk's predecessor."""

from knowledge_ingest.application.chunking.boundaries import contains_technical_keyword
from knowledge_ingest.application.chunking.sentences import split_sentences
from knowledge_ingest.domain.entities import ChunkingConfig, OverlappedChunk, OverlapStrategy

_CONCEPT_SENTENCES = 2
_MIN_CONTENT_WORD_LENGTH = 4


def select_overlap_strategy(previous: str, current: str, config: ChunkingConfig) -> OverlapStrategy:
    """Pick the overlap strategy from the text of a chunk pair."""
    pair = f"{previous.lower()}\n{current.lower()}"
    if "project" in pair and "research" in pair:
        return OverlapStrategy.CONCEPT
    if contains_technical_keyword(previous, config) or contains_technical_keyword(current, config):
        return OverlapStrategy.SENTENCE
    return OverlapStrategy.MINIMAL


def _concept_overlap(previous: str, current: str) -> list[str]:
    sentences = list(split_sentences(previous))
    content_words = {w for w in current.lower().split() if len(w) >= _MIN_CONTENT_WORD_LENGTH}
    relevant = [s for s in sentences if content_words.intersection(s.lower().split())]
    # No shared vocabulary: fall back to the tail of the previous chunk.
    return (relevant or sentences)[-_CONCEPT_SENTENCES:]


def _sentence_overlap(previous: str, percentage: int) -> list[str]:
    sentences = list(split_sentences(previous))
    count = max(1, int(len(sentences) * percentage / 100))
    return sentences[-count:]


def _minimal_overlap(previous: str) -> list[str]:
    return list(split_sentences(previous))[-1:]


def overlap_text_for(previous: str, current: str, config: ChunkingConfig) -> tuple[str, OverlapStrategy]:
    strategy = select_overlap_strategy(previous, current, config)
    if strategy == OverlapStrategy.CONCEPT:
        sentences = _concept_overlap(previous, current)
    elif strategy == OverlapStrategy.SENTENCE:
        sentences = _sentence_overlap(previous, config.overlap_percentage)
    else:
        sentences = _minimal_overlap(previous)
    return " ".join(sentences), strategy


def apply_overlap(chunks: list[str], config: ChunkingConfig) -> list[OverlappedChunk]:
    """Attach predecessor context to every chunk after the first.

    Context is always taken from the predecessor's own body, never from text
    that was itself prepended. The first chunk is returned untouched.
    """
    if not config.enable_overlap or len(chunks) <= 1:
        return [OverlappedChunk(body=chunk) for chunk in chunks]

    result = [OverlappedChunk(body=chunks[0])]
    for previous, current in zip(chunks, chunks[1:]):
        text, strategy = overlap_text_for(previous, current, config)
        result.append(OverlappedChunk(body=current, overlap_text=text, strategy=strategy))
    return result
