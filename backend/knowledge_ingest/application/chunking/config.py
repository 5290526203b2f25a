"""Resolution of caller overrides into an immutable ChunkingConfig."""

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any

from knowledge_ingest.config import Settings, get_settings
from knowledge_ingest.domain.entities import (
    ChunkingConfig,
    ChunkingStrategy,
    ContentTransitions,
    FactTypeKeywords,
    SizeMultipliers,
)
from knowledge_ingest.domain.exceptions import ChunkingConfigError

_FIELD_NAMES = frozenset(f.name for f in fields(ChunkingConfig))
_NESTED = {
    "fact_type_keywords": FactTypeKeywords,
    "content_transitions": ContentTransitions,
    "size_multipliers": SizeMultipliers,
}
_KEYWORD_FIELDS = ("research_project_names", "technical_keywords")


def default_chunking_config(settings: Settings | None = None) -> ChunkingConfig:
    """System defaults, taken from application settings."""
    settings = settings or get_settings()
    try:
        strategy = ChunkingStrategy(settings.chunking_strategy)
    except ValueError as exc:
        raise ChunkingConfigError("strategy", str(exc)) from exc

    return ChunkingConfig(
        strategy=strategy,
        min_chunk_size=settings.chunking_min_chunk_size,
        max_chunk_size=settings.chunking_max_chunk_size,
        enable_overlap=settings.chunking_enable_overlap,
        overlap_percentage=settings.chunking_overlap_percentage,
        preserve_research_projects=settings.chunking_preserve_research_projects,
        research_project_names=tuple(settings.chunking_research_project_names),
        enhance_semantic_boundaries=settings.chunking_enhance_semantic_boundaries,
        technical_keywords=tuple(settings.chunking_technical_keywords),
        hierarchical_summary_size=settings.chunking_hierarchical_summary_size,
    )


def _coerce_nested(name: str, value: Any, base: Any) -> Any:
    if isinstance(value, _NESTED[name]):
        return value
    if not isinstance(value, Mapping):
        raise ChunkingConfigError(name, f"expected a mapping, got {type(value).__name__}")
    overrides = {}
    for key, item in value.items():
        if item is None:
            continue
        overrides[key] = tuple(k.lower() for k in item) if isinstance(item, (list, tuple)) else item
    try:
        return replace(base, **overrides)
    except TypeError as exc:
        raise ChunkingConfigError(name, str(exc)) from exc


def resolve_chunking_config(
    overrides: ChunkingConfig | Mapping[str, Any] | None = None,
    *,
    settings: Settings | None = None,
) -> ChunkingConfig:
    """Merge overrides over the defaults and validate the result.

    ``None`` values mean "unset" and keep the default. Unknown keys and
    out-of-range values raise ``ChunkingConfigError``.
    """
    if isinstance(overrides, ChunkingConfig):
        return overrides

    base = default_chunking_config(settings)
    if not overrides:
        return base

    unknown = set(overrides) - _FIELD_NAMES
    if unknown:
        raise ChunkingConfigError(sorted(unknown)[0], "unknown chunking option")

    changes: dict[str, Any] = {}
    for name, value in overrides.items():
        if value is None:
            continue
        if name == "strategy":
            try:
                value = ChunkingStrategy(value)
            except ValueError as exc:
                raise ChunkingConfigError(name, str(exc)) from exc
        elif name in _NESTED:
            value = _coerce_nested(name, value, getattr(base, name))
        elif name in _KEYWORD_FIELDS:
            value = tuple(str(v).lower() for v in value)
        changes[name] = value

    return replace(base, **changes)
