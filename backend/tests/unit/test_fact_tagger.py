"""Unit tests for advisory fact tagging."""

import pytest

from knowledge_ingest.application.chunking import contains_key_facts, fact_types
from knowledge_ingest.domain.entities import ChunkingConfig, FactTypeKeywords


@pytest.fixture
def config() -> ChunkingConfig:
    return ChunkingConfig()


def test_company_facts(config):
    text = "The company was founded in 1999."
    assert contains_key_facts(text, config)
    assert fact_types(text, config) == ["company"]


def test_acronym_definition_is_a_key_fact_without_a_type(config):
    text = "The National Aeronautics and Space Administration (NASA) explores space."
    assert contains_key_facts(text, config)
    assert fact_types(text, config) == []


def test_stands_for_is_a_key_fact(config):
    assert contains_key_facts("ROI stands for return on investment.", config)


def test_plain_text_has_no_facts(config):
    assert not contains_key_facts("The weather is nice.", config)
    assert fact_types("The weather is nice.", config) == []


def test_platform_counts_as_technical_and_product(config):
    assert fact_types("Our platform scales.", config) == ["technical", "product"]


def test_people_mentions(config):
    assert contains_key_facts("Our CEO spoke today.", config)
    assert fact_types("Our CEO spoke today.", config) == ["people"]


def test_custom_keywords_are_used():
    config = ChunkingConfig(fact_type_keywords=FactTypeKeywords(company=(), technical=(), people=("captain",), product=()))
    assert fact_types("The captain and the company.", config) == ["people"]
