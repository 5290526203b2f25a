"""Chunking engine — segmentation, normalization, overlap and strategy variants."""

from .config import default_chunking_config, resolve_chunking_config
from .chunk_context import build_chunk_context
from .content_aware import content_aware_chunks
from .fact_tagger import contains_key_facts, fact_types
from .fixed_size import chunk_fixed_size
from .hierarchical import hierarchical_chunks, strip_hierarchy_prefix, summarize_chunk
from .normalizer import coalesce_small_segments, finalize_segment
from .overlap import apply_overlap, select_overlap_strategy
from .segmenter import scan_segments, semantic_chunks
from .sentences import split_sentences

__all__ = [
    "default_chunking_config",
    "resolve_chunking_config",
    "build_chunk_context",
    "content_aware_chunks",
    "contains_key_facts",
    "fact_types",
    "chunk_fixed_size",
    "hierarchical_chunks",
    "strip_hierarchy_prefix",
    "summarize_chunk",
    "coalesce_small_segments",
    "finalize_segment",
    "apply_overlap",
    "select_overlap_strategy",
    "scan_segments",
    "semantic_chunks",
    "split_sentences",
]
