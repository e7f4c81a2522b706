"""
Unit tests for Chunker and split_sentences.
"""
import re

import pytest

from voicerag.ingestion.chunker import Chunker, split_sentences


def _squash(s: str) -> str:
    return re.sub(r"\s+", "", s)


class TestSplitSentences:
    def test_keeps_terminators_and_trailing_whitespace(self):
        assert split_sentences("One. Two!  Three?") == ["One. ", "Two!  ", "Three?"]

    def test_terminator_runs_form_one_boundary(self):
        assert split_sentences("Really?! Yes.") == ["Really?! ", "Yes."]

    def test_remainder_without_terminator(self):
        assert split_sentences("First. tail") == ["First. ", "tail"]


class TestChunker:
    def test_empty_text_yields_no_chunks(self):
        assert Chunker().split("") == []
        assert Chunker().split("   \n ") == []

    def test_short_chinese_document_is_one_chunk(self):
        text = "今天天气很好。我喜欢跑步。"
        assert Chunker().split(text, chunk_size=500) == [text]

    def test_flushes_before_exceeding_size(self):
        assert Chunker().split("One. Two. Three.", chunk_size=8) == ["One.", "Two.", "Three."]

    def test_packs_sentences_up_to_size(self):
        assert Chunker().split("One. Two. Three.", chunk_size=9) == ["One. Two.", "Three."]

    def test_oversized_sentence_is_not_truncated(self):
        sentence = "A" * 20 + "."
        chunks = Chunker().split(sentence + " Short.", chunk_size=5)
        assert chunks == [sentence, "Short."]

    def test_final_remainder_chunk(self):
        chunks = Chunker().split("Alpha beta. trailing words", chunk_size=12)
        assert chunks == ["Alpha beta.", "trailing words"]

    def test_chunks_reconstruct_all_sentences(self):
        text = "Alpha beta. Gamma! Delta? Epsilon。Zeta eta theta. Iota"
        chunks = Chunker().split(text, chunk_size=10)
        assert len(chunks) > 1
        assert _squash("".join(chunks)) == _squash(text)
        assert all(c.strip() for c in chunks)

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            Chunker().split("text.", chunk_size=0)
