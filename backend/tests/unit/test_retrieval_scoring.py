"""Unit tests for content freshness and authority scores."""

from datetime import datetime, timedelta, timezone

import pytest

from knowledge_ingest.application.services.retrieval_scoring import (
    calculate_content_authority,
    calculate_content_freshness,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("age_days", "score"),
    [(0, 1.0), (1, 0.9), (7, 0.9), (8, 0.7), (30, 0.7), (31, 0.5), (90, 0.5), (91, 0.3), (180, 0.3), (181, 0.1), (900, 0.1)],
)
def test_freshness_steps(age_days, score):
    stamp = NOW - timedelta(days=age_days)
    assert calculate_content_freshness(stamp, stamp, now=NOW) == score


def test_freshness_uses_the_more_recent_timestamp():
    created = NOW - timedelta(days=400)
    updated = NOW - timedelta(days=2)
    assert calculate_content_freshness(created, updated, now=NOW) == 0.9


def test_future_timestamps_count_as_today():
    future = NOW + timedelta(days=3)
    assert calculate_content_freshness(future, future, now=NOW) == 1.0


def test_naive_timestamps_are_treated_as_utc():
    naive = (NOW - timedelta(days=8)).replace(tzinfo=None)
    assert calculate_content_freshness(naive, naive, now=NOW) == 0.7


def test_freshness_defaults_to_current_time():
    assert calculate_content_freshness(datetime.now(timezone.utc), datetime.now(timezone.utc)) == 1.0


@pytest.mark.parametrize(
    ("source_type", "status", "has_description", "expected"),
    [
        ("file", "completed", True, 1.0),
        ("file", "pending", False, 0.7),
        ("website", "processing", False, 0.7),
        ("text", "pending", False, 0.5),
        ("qa", "completed", False, 0.85),
        ("database", "failed", True, 0.6),
    ],
)
def test_authority(source_type, status, has_description, expected):
    assert calculate_content_authority(source_type, status, has_description) == pytest.approx(expected)


def test_authority_stays_within_unit_interval():
    for source_type in ("file", "website", "text", "qa", "other"):
        for status in ("pending", "processing", "completed", "failed"):
            for has_description in (True, False):
                assert 0.0 <= calculate_content_authority(source_type, status, has_description) <= 1.0
