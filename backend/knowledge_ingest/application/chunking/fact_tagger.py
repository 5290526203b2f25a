"""Fact tagging — advisory key-fact signals attached to finished chunks."""

import re

from knowledge_ingest.domain.entities import ChunkingConfig

_ACRONYM_DEFINITION = re.compile(r"\([A-Z]{2,}\)")


def _mentions_any(lower_text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in lower_text for keyword in keywords)


def contains_key_facts(text: str, config: ChunkingConfig) -> bool:
    """Company facts, acronym definitions, product or people mentions."""
    lower = text.lower()
    keywords = config.fact_type_keywords
    if _mentions_any(lower, keywords.company):
        return True
    if "stands for" in lower or _ACRONYM_DEFINITION.search(text):
        return True
    if _mentions_any(lower, keywords.product):
        return True
    return _mentions_any(lower, keywords.people)


def fact_types(text: str, config: ChunkingConfig) -> list[str]:
    """Names of every keyword class the text mentions, in tagging order."""
    lower = text.lower()
    return [name for name, keywords in config.fact_type_keywords.as_pairs() if _mentions_any(lower, keywords)]
