"""
Chunker
=======
Splits raw text into sentence-aligned chunks for embedding.

A sentence ends at a run of 。 . ! ? and carries the whitespace that
follows it. Chunk boundaries fall only between sentences; a single sentence
longer than chunk_size is kept whole.
"""

import re
from typing import List

_SENTENCE_RE = re.compile(r".*?(?:[。.!?]+|$)\s*", re.S)


def split_sentences(text: str) -> List[str]:
    """Return the sentences of text in order, each with its trailing whitespace."""
    return [s for s in _SENTENCE_RE.findall(text) if s.strip()]


class Chunker:
    """Greedy sentence packer."""

    def split(self, text: str, chunk_size: int = 500) -> List[str]:
        """
        Pack consecutive sentences into chunks of at most chunk_size characters.

        :param text: The full text content of the document
        :param chunk_size: Soft maximum characters per chunk (default=500)
        :return: List of stripped, non-empty chunk texts
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        chunks: List[str] = []
        buffer = ""

        for sentence in split_sentences(text):
            if buffer and len(buffer) + len(sentence.rstrip()) > chunk_size:
                chunks.append(buffer.strip())
                buffer = sentence
            else:
                buffer += sentence

        if buffer.strip():
            chunks.append(buffer.strip())

        return chunks
