"""Hierarchical chunking — a summary chunk ahead of every detail chunk."""

from knowledge_ingest.application.chunking.fact_tagger import contains_key_facts
from knowledge_ingest.application.chunking.segmenter import semantic_chunks
from knowledge_ingest.application.chunking.sentences import split_sentences
from knowledge_ingest.domain.entities import ChunkingConfig

SUMMARY_PREFIX = "[SUMMARY] "
DETAIL_PREFIX = "[DETAIL] "


def summarize_chunk(chunk: str, config: ChunkingConfig) -> str:
    """Leading sentences of the chunk, key-fact sentences first.

    The summary is capped at ``hierarchical_summary_size`` and at
    ``summary_size_ratio`` of the chunk. When key-fact sentences alone fill
    less than ``min_summary_ratio`` of that target, the remaining leading
    sentences top it up. Sentences keep their document order.
    """
    sentences = list(split_sentences(chunk))
    target = min(config.hierarchical_summary_size, int(len(chunk) * config.summary_size_ratio))

    chosen: set[int] = set()
    length = 0
    for i, sentence in enumerate(sentences):
        if length + len(sentence) > target:
            break
        if contains_key_facts(sentence, config):
            chosen.add(i)
            length += len(sentence)

    if length < target * config.min_summary_ratio:
        for i, sentence in enumerate(sentences):
            if length + len(sentence) > target:
                break
            if i not in chosen:
                chosen.add(i)
                length += len(sentence)

    return " ".join(sentences[i] for i in sorted(chosen))


def hierarchical_chunks(text: str, config: ChunkingConfig) -> list[str]:
    """Base semantic chunks, each preceded by its summary when one exists."""
    chunks: list[str] = []
    for base in semantic_chunks(text, config):
        summary = summarize_chunk(base, config)
        if summary:
            chunks.append(f"{SUMMARY_PREFIX}{summary}")
        chunks.append(f"{DETAIL_PREFIX}{base}")
    return chunks


def strip_hierarchy_prefix(chunk: str) -> str:
    for prefix in (SUMMARY_PREFIX, DETAIL_PREFIX):
        if chunk.startswith(prefix):
            return chunk[len(prefix):]
    return chunk
