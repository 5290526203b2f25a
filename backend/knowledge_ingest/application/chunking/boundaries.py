"""Line-level boundary rules for the structural segmenter.

Each rule is a pure predicate over one trimmed line. Rules are not mutually
exclusive, so ``STRUCTURAL_BREAK_RULES`` is evaluated in its declared order and
the first match names the break.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from knowledge_ingest.domain.entities import ChunkingConfig, ContentType

_MARKDOWN_MAJOR_HEADER = re.compile(r"^#{1,2}\s+")
_MARKDOWN_ANY_HEADER = re.compile(r"^#{1,6}\s+")
_UPPERCASE_LINE = re.compile(r"^[A-Z\s]+$")
_NUMBERED_HEADING = re.compile(r"^\d+\.\s+[A-Z]")
_RESEARCH_PROJECT_HEADER = re.compile(r"^###?\s+Project\s+[A-Z][a-zA-Z]+")
_DIVIDER = re.compile(r"^(=+|-+)$")
_LIST_ITEM = (
    re.compile(r"^\s*[-*•]\s+"),
    re.compile(r"^\s*\d+\.\s+"),
    re.compile(r"^\s*[a-zA-Z]\.\s+"),
)

_RESEARCH_TERMS = ("research", "development")
_FOUNDING_TERMS = ("founded",)
_OFFERING_TERMS = ("products", "services")


@dataclass(frozen=True)
class BoundaryRule:
    name: str
    matches: Callable[[str, ChunkingConfig], bool]


def is_markdown_header(line: str, config: ChunkingConfig) -> bool:
    return bool(_MARKDOWN_MAJOR_HEADER.match(line))


def is_uppercase_heading(line: str, config: ChunkingConfig) -> bool:
    return len(line) > 5 and line == line.upper() and bool(_UPPERCASE_LINE.match(line))


def is_numbered_heading(line: str, config: ChunkingConfig) -> bool:
    return bool(_NUMBERED_HEADING.match(line))


def is_research_project_header(line: str, config: ChunkingConfig) -> bool:
    return config.preserve_research_projects and bool(_RESEARCH_PROJECT_HEADER.match(line))


def is_divider(line: str, config: ChunkingConfig) -> bool:
    return bool(_DIVIDER.match(line))


STRUCTURAL_BREAK_RULES: tuple[BoundaryRule, ...] = (
    BoundaryRule("markdown_header", is_markdown_header),
    BoundaryRule("uppercase_heading", is_uppercase_heading),
    BoundaryRule("numbered_heading", is_numbered_heading),
    BoundaryRule("research_project_header", is_research_project_header),
    BoundaryRule("divider", is_divider),
)


def matching_break_rule(line: str, config: ChunkingConfig) -> str | None:
    """Name of the first structural rule the line triggers, or None."""
    for rule in STRUCTURAL_BREAK_RULES:
        if rule.matches(line, config):
            return rule.name
    return None


def is_major_structural_break(line: str, config: ChunkingConfig) -> bool:
    return matching_break_rule(line, config) is not None


# ── Accumulation rules ───────────────────────────────────────────────


def _project_names(config: ChunkingConfig) -> tuple[str, ...]:
    return tuple(name.lower() for name in config.research_project_names if name)


def starts_research_section(line: str, config: ChunkingConfig) -> bool:
    """A line that opens research / sub-project content."""
    lower = line.lower()
    if "project " not in lower:
        return False
    return any(name in lower for name in _project_names(config)) or any(
        term in lower for term in _RESEARCH_TERMS
    )


def is_research_related(segment: str, config: ChunkingConfig) -> bool:
    """Whether the running segment already belongs to a research context."""
    lower = segment.lower()
    return (
        "project" in lower
        or any(term in lower for term in _RESEARCH_TERMS)
        or any(name in lower for name in _project_names(config))
    )


def is_semantic_transition(segment: str, line: str, config: ChunkingConfig) -> bool:
    """An overview-style segment followed by a line introducing offerings."""
    if not segment.strip():
        return False
    transitions = config.content_transitions
    segment_lower = segment.lower()
    line_lower = line.lower()
    segment_is_overview = any(
        kw in segment_lower for kw in (*transitions.overview_to_research, *_FOUNDING_TERMS)
    )
    line_is_follow_on = any(
        kw in line_lower for kw in (*transitions.research_to_products, *_OFFERING_TERMS)
    )
    return segment_is_overview and line_is_follow_on


def contains_technical_keyword(text: str, config: ChunkingConfig) -> bool:
    lower = text.lower()
    return any(kw in lower for kw in config.technical_keywords)


# ── Content classification ───────────────────────────────────────────


def is_list_item(line: str) -> bool:
    return any(pattern.match(line) for pattern in _LIST_ITEM)


def is_header_line(line: str, config: ChunkingConfig) -> bool:
    return (
        bool(_MARKDOWN_ANY_HEADER.match(line))
        or bool(_UPPERCASE_LINE.match(line))
        or is_major_structural_break(line, config)
    )


def classify_line(line: str, config: ChunkingConfig) -> ContentType:
    """Classify a line; technical → list → header → narrative, first match wins."""
    if contains_technical_keyword(line, config):
        return ContentType.TECHNICAL
    if is_list_item(line):
        return ContentType.LIST
    if is_header_line(line, config):
        return ContentType.HEADER
    return ContentType.NARRATIVE
