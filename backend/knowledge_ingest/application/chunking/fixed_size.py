"""Fixed-size fallback chunking for content too short for semantic chunking."""


def chunk_fixed_size(content: str, max_chunk_size: int = 8000) -> list[str]:
    """Slice content into windows of at most ``max_chunk_size`` characters.

    Each window backs off to the last space at or before its end, provided
    that space lies after the window start, so words are not cut in half.
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
    if len(content) <= max_chunk_size:
        return [content]

    chunks: list[str] = []
    start = 0
    while start < len(content):
        end = start + max_chunk_size
        if end < len(content):
            last_space = content.rfind(" ", 0, end + 1)
            if last_space > start:
                end = last_space
        chunks.append(content[start:end].strip())
        start = end

    return [chunk for chunk in chunks if chunk]
