"""Colored pipeline logger — ANSI-colored console output for the ingest pipeline.

Gives each stage of source extraction → chunking → vectorization its own
color so one agent's training run can be followed in the terminal.

Color scheme:
    🟡 Yellow  — Source extraction
    🔵 Blue    — Chunking
    🟣 Magenta — Retrieval scoring
    🟠 Cyan    — Vector record emission / storage
    🔴 Red     — Errors
    ⚪ Gray    — Details / stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# (label, color, icon)
Stage = tuple[str, str, str]


class PipelineStage:
    """Stages of the ingest pipeline."""

    EXTRACT: Stage = ("EXTRACT", _Colors.YELLOW, "📄")
    CHUNKING: Stage = ("CHUNKING", _Colors.BLUE, "✂️")
    SCORING: Stage = ("SCORING", _Colors.MAGENTA, "📊")
    VECTORIZE: Stage = ("VECTORIZE", _Colors.CYAN, "🧮")
    STORE: Stage = ("STORE", _Colors.CYAN, "💾")
    PIPELINE: Stage = ("PIPELINE", _Colors.WHITE, "⚙️")
    ERROR: Stage = ("ERROR", _Colors.RED, "❌")
    COMPLETE: Stage = ("COMPLETE", _Colors.GREEN, "✅")


def _format_details(kwargs: dict[str, Any], color: str = _Colors.GRAY) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {color}({details}){_Colors.RESET}"


class PipelineLogger:
    """Color-coded logger for extraction, chunking and vectorization.

    Usage:
        plog = PipelineLogger("SourceExtractorService")
        plog.step_start(PipelineStage.EXTRACT, "Extracting sources", agent_id=7)
        plog.detail("Skipped blank source", source_id=12)
        plog.step_complete(PipelineStage.EXTRACT, "Extracted 3 sources")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} {color}{message}{_Colors.RESET}"
            + _format_details(kwargs)
        )

    def step_complete(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{icon} [{label}]{_Colors.RESET} {_Colors.GREEN}✓ {message}{_Colors.RESET}"
            + _format_details(kwargs)
        )

    def step_error(self, stage: Stage, message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} {_Colors.RED}{message}{_Colors.RESET}"
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        self._logger.info(f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}" + _format_details(kwargs, _Colors.DIM))

    def separator(self, title: str = "") -> None:
        if title:
            self._logger.info(f"{_Colors.GRAY}{'─' * 10} {title} {'─' * max(0, 50 - len(title))}{_Colors.RESET}")
        else:
            self._logger.info(f"{_Colors.GRAY}{'─' * 60}{_Colors.RESET}")

    def stats(self, **kwargs: Any) -> None:
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **kwargs: Any):
        """Log start and end of a step with its elapsed time; errors are logged and re-raised."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)
