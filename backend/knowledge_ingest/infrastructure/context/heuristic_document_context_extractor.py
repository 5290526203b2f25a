"""Heuristic document context extractor — title, summary and section outline from plain text.

No model calls: the title is the first short line without a period, the
summary is the opening sentences, and sections are markdown headings.
"""

import logging
import re

from knowledge_ingest.application.interfaces import DocumentContextExtractor
from knowledge_ingest.domain.entities import DocumentContext, SourceType

logger = logging.getLogger(__name__)

_TITLE_SCAN_LINES = 5
_MAX_TITLE_LENGTH = 100
_SUMMARY_SENTENCES = 3
_MAX_SUMMARY_LENGTH = 150
_FALLBACK_PREVIEW_LENGTH = 200
_MAX_SECTION_TITLES = 10

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_MARKDOWN_HEADING_RE = re.compile(r"^#{1,6}\s+(.+)$", re.MULTILINE)
_HEADING_MARKER_RE = re.compile(r"^#+\s+")
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


class HeuristicDocumentContextExtractor(DocumentContextExtractor):
    """Derives document-level context with simple text heuristics."""

    async def extract_context(
        self,
        source_id: int,
        source_type: str,
        text: str,
        source_name: str,
    ) -> DocumentContext:
        try:
            context = DocumentContext(
                title=self._extract_title(text, source_name, source_type),
                summary=self._summarize(text),
                section_titles=self._section_titles(text),
                word_count=len(text.split()),
            )
        except Exception as e:
            logger.error("Failed to extract document context for source %s: %s", source_id, e)
            return DocumentContext(
                title=source_name,
                summary=text[:_FALLBACK_PREVIEW_LENGTH] + "...",
                word_count=len(text.split()),
            )

        logger.debug(
            "Extracted context for source %s: title=%r, sections=%d",
            source_id,
            context.title,
            len(context.section_titles),
        )
        return context

    @staticmethod
    def _extract_title(text: str, source_name: str, source_type: str) -> str:
        for line in text.split("\n")[:_TITLE_SCAN_LINES]:
            candidate = line.strip()
            if candidate and len(candidate) < _MAX_TITLE_LENGTH and "." not in candidate:
                return _HEADING_MARKER_RE.sub("", candidate)

        if source_type == SourceType.FILE.value:
            return _EXTENSION_RE.sub("", source_name)
        return source_name

    @staticmethod
    def _summarize(text: str) -> str:
        opening = " ".join(m.strip() for m in _SENTENCE_RE.findall(text)[:_SUMMARY_SENTENCES]).strip()
        if len(opening) <= _MAX_SUMMARY_LENGTH:
            return opening
        return opening[:_MAX_SUMMARY_LENGTH].strip() + "..."

    @staticmethod
    def _section_titles(text: str) -> list[str]:
        return [title.strip() for title in _MARKDOWN_HEADING_RE.findall(text)][:_MAX_SECTION_TITLES]
