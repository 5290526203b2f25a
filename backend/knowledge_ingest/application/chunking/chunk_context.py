"""Per-chunk context derived from the document context."""

from knowledge_ingest.domain.entities import ChunkContext, ChunkPosition, DocumentContext

CONTEXT_SNIPPET_LENGTH = 100


def build_chunk_context(document_context: DocumentContext, chunks: list[str], chunk_index: int) -> ChunkContext:
    """Position, section title and neighbouring snippets for one chunk.

    The section title is picked proportionally: chunk i of n maps to section
    floor(i / n * sections).
    """
    total = len(chunks)
    section_title = None
    if document_context.section_titles and total:
        sections = document_context.section_titles
        section_index = min(int(chunk_index / total * len(sections)), len(sections) - 1)
        section_title = sections[section_index]

    preceding = chunks[chunk_index - 1][-CONTEXT_SNIPPET_LENGTH:] if chunk_index > 0 else None
    following = chunks[chunk_index + 1][:CONTEXT_SNIPPET_LENGTH] if chunk_index < total - 1 else None

    return ChunkContext(
        chunk_position=ChunkPosition.for_index(chunk_index, total),
        document_title=document_context.title,
        document_summary=document_context.summary,
        section_title=section_title,
        preceding_context=preceding,
        following_context=following,
    )
