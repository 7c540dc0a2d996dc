"""Sentence-aligned text chunking for document ingestion."""

import re
from dataclasses import dataclass

# A sentence ends at terminal punctuation followed by whitespace
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


@dataclass
class TextChunk:
    """A bounded-size, sentence-aligned slice of a document."""

    chunk_index: int
    content: str


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences on ``.``, ``!`` and ``?``.

    Trailing text without terminal punctuation is kept as a final sentence.
    """
    if not text or not text.strip():
        return []
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text.strip()) if s.strip()]


def chunk_text(text: str, max_chunk_size: int = 1000) -> list[TextChunk]:
    """
    Greedily pack whole sentences into chunks of at most ``max_chunk_size`` characters.

    A chunk is flushed when adding the next sentence would exceed the limit. A
    single sentence longer than the limit becomes its own chunk untruncated, so
    no sentence is ever split across chunks.

    Args:
        text: Raw document text
        max_chunk_size: Soft upper bound on chunk length in characters

    Returns:
        Chunks with 0-based indices; empty list for empty text

    Raises:
        ValueError: If max_chunk_size is not positive
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")

    chunks: list[TextChunk] = []
    current = ""

    for sentence in split_sentences(text):
        candidate = f"{current} {sentence}" if current else sentence
        if current and len(candidate) > max_chunk_size:
            chunks.append(TextChunk(chunk_index=len(chunks), content=current))
            current = sentence
        else:
            current = candidate

    if current:
        chunks.append(TextChunk(chunk_index=len(chunks), content=current))

    return chunks
