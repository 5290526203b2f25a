"""Unit tests for the segmenter's line boundary rules."""

import pytest

from knowledge_ingest.application.chunking.boundaries import (
    classify_line,
    is_research_related,
    is_semantic_transition,
    matching_break_rule,
    starts_research_section,
)
from knowledge_ingest.domain.entities import ChunkingConfig, ContentType


@pytest.fixture
def config() -> ChunkingConfig:
    return ChunkingConfig(research_project_names=("atlas",))


@pytest.mark.parametrize(
    ("line", "rule"),
    [
        ("# Title", "markdown_header"),
        ("## Subtitle", "markdown_header"),
        ("COMPANY OVERVIEW", "uppercase_heading"),
        ("1. Introduction", "numbered_heading"),
        ("### Project Atlas", "research_project_header"),
        ("======", "divider"),
        ("-----", "divider"),
    ],
)
def test_structural_breaks_are_named_by_first_matching_rule(config, line, rule):
    assert matching_break_rule(line, config) == rule


@pytest.mark.parametrize("line", ["### Details", "ABC", "Plain narrative text.", "", "1.5 million units"])
def test_ordinary_lines_are_not_breaks(config, line):
    assert matching_break_rule(line, config) is None


def test_research_project_header_respects_preserve_flag():
    config = ChunkingConfig(preserve_research_projects=False)
    assert matching_break_rule("### Project Atlas", config) is None


def test_research_section_requires_project_mention(config):
    assert starts_research_section("Project Atlas kicked off in May", config)
    assert starts_research_section("The project research phase", config)
    assert not starts_research_section("Research is important", config)
    assert not starts_research_section("A side project ran late", config)


def test_research_related_segment(config):
    assert is_research_related("Our development roadmap", config)
    assert is_research_related("notes on atlas", config)
    assert not is_research_related("We sell shoes.", config)


def test_semantic_transition_from_overview_to_offerings(config):
    assert is_semantic_transition("Company overview\nFounded in 1999.\n", "Our products include", config)
    assert not is_semantic_transition("", "Our products include", config)
    assert not is_semantic_transition("We sell shoes.\n", "Our products include", config)


@pytest.mark.parametrize(
    ("line", "content_type"),
    [
        ("The system architecture is modular", ContentType.TECHNICAL),
        ("- first item", ContentType.LIST),
        ("2. second item", ContentType.LIST),
        ("OVERVIEW", ContentType.HEADER),
        ("#### Deep heading", ContentType.HEADER),
        ("We like cats.", ContentType.NARRATIVE),
    ],
)
def test_classify_line(config, line, content_type):
    assert classify_line(line, config) == content_type


def test_technical_wins_over_list(config):
    assert classify_line("- system requirements", config) == ContentType.TECHNICAL
