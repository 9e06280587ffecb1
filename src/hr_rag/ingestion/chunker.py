"""Fixed-width text chunking with overlap."""

from __future__ import annotations


def chunk_text(text: str, chunk_size: int = 1200, chunk_overlap: int = 200) -> list[str]:
    """Split *text* into overlapping windows of *chunk_size* characters.

    Each window starts ``chunk_size - chunk_overlap`` characters after the
    previous one.  The last window may be shorter.  No whitespace or
    sentence handling is done: windows are plain slices.

    Parameters
    ----------
    text:
        Raw extracted document text.
    chunk_size:
        Window length in characters, must be positive.
    chunk_overlap:
        Characters shared by consecutive windows, ``0 <= overlap < size``.

    Returns
    -------
    list[str]
        Windows in document order; empty for empty input.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if not 0 <= chunk_overlap < chunk_size:
        raise ValueError(
            f"chunk_overlap must be in [0, {chunk_size}), got {chunk_overlap}"
        )

    chunks: list[str] = []
    start = 0
    length = len(text)
    while start < length:
        end = min(start + chunk_size, length)
        chunks.append(text[start:end])
        if end == length:
            break
        start = end - chunk_overlap
    return chunks
