"""Retrieval scoring — heuristic freshness and authority scores for vector records."""

from datetime import datetime, timezone

from knowledge_ingest.domain.entities import SourceStatus, SourceType

# (max age in days, score), checked in order; anything older scores _STALE_SCORE.
_FRESHNESS_STEPS: tuple[tuple[int, float], ...] = (
    (0, 1.0),
    (7, 0.9),
    (30, 0.7),
    (90, 0.5),
    (180, 0.3),
)
_STALE_SCORE = 0.1

_BASE_AUTHORITY = 0.5
_TYPE_AUTHORITY: dict[str, float] = {
    SourceType.FILE.value: 0.2,
    SourceType.WEBSITE.value: 0.1,
    SourceType.TEXT.value: 0.0,
    SourceType.QA.value: 0.15,
}
_STATUS_AUTHORITY: dict[str, float] = {
    SourceStatus.COMPLETED.value: 0.2,
    SourceStatus.PROCESSING.value: 0.1,
}
_DESCRIPTION_AUTHORITY = 0.1


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calculate_content_freshness(
    created_at: datetime,
    updated_at: datetime,
    *,
    now: datetime | None = None,
) -> float:
    """Step score from whole days since the more recent of the two timestamps.

    Naive timestamps are treated as UTC. Timestamps in the future count as today.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    most_recent = max(_as_utc(created_at), _as_utc(updated_at))
    days_since_update = max(0, (now - most_recent).days)

    for max_days, score in _FRESHNESS_STEPS:
        if days_since_update <= max_days:
            return score
    return _STALE_SCORE


def calculate_content_authority(source_type: str, status: str, has_description: bool) -> float:
    """Base 0.5 adjusted by source type, lifecycle status and description, clamped to [0, 1]."""
    authority = _BASE_AUTHORITY
    authority += _TYPE_AUTHORITY.get(source_type, 0.0)
    authority += _STATUS_AUTHORITY.get(status, 0.0)
    if has_description:
        authority += _DESCRIPTION_AUTHORITY
    return max(0.0, min(1.0, round(authority, 4)))
