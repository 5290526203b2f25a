"""Centralized logging configuration.

Applies per-category log levels from Settings, so the chunking pipeline can
run at DEBUG while SQL statements and outbound HTTP stay quiet.

Usage:
    from knowledge_ingest.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once at startup (FastAPI lifespan or a worker entry point)
"""

import logging
import sys

from knowledge_ingest.config import Settings, get_settings

# Settings field → logger names it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_pipeline": [
        "SemanticChunkerService",
        "SourceExtractorService",
        "KnowledgeTrainingService",
        "knowledge_ingest.application",
    ],
    "log_level_openrouter": [
        "knowledge_ingest.infrastructure.openrouter",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root and per-category logging levels."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn installs its own handler; scripts and tests may not have one
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s — %(message)s"))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, sql=%s, http=%s, pipeline=%s, openrouter=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_pipeline,
        settings.log_level_openrouter,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
