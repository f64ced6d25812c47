"""
Tests for the tokenization strategies.

These tests validate that:

- word mode strips boundary punctuation and keeps contractions whole
- n-gram mode yields max(0, m - k + 1) ordered windows
- sentence and tweet modes split as expected
- unknown strategies and bad options fail when the tokenizer is built
"""

from __future__ import annotations

import pytest

from textclean.features.normalization import Normalizer
from textclean.features.tokenization import (
    TOKENIZERS,
    build_tokenizer,
    build_tokenizer_from_config,
    register_tokenizer,
    tokenize_text,
)
from textclean.utils.run_utils import PipelineConfigError


TEN_WORDS = "the quick brown fox jumps over the lazy sleeping dog"


# ---------------------------------------------------------------------------
# Word mode
# ---------------------------------------------------------------------------


def test_word_mode_on_lowercased_text():
    text = Normalizer().normalize("A character string")
    assert build_tokenizer("word").tokenize(text) == ["a", "character", "string"]


def test_word_mode_strips_punctuation_keeps_contractions():
    tokens = tokenize_text("Hello, world! don't stop.", method="word")
    assert tokens == ["Hello", "world", "don't", "stop"]


def test_empty_text_gives_no_tokens():
    for method in ("word", "sentence", "tweet"):
        assert tokenize_text("", method=method) == []
    assert tokenize_text("", method="ngram", size=2) == []


# ---------------------------------------------------------------------------
# n-gram mode
# ---------------------------------------------------------------------------


def test_trigrams_over_ten_words():
    words = TEN_WORDS.split()
    grams = build_tokenizer("ngram", size=3).tokenize(TEN_WORDS)

    assert len(grams) == 8
    for i, gram in enumerate(grams):
        assert gram == " ".join(words[i : i + 3])


def test_ngram_longer_than_text_is_empty():
    assert tokenize_text("two words", method="ngram", size=3) == []


def test_unigrams_equal_words():
    assert tokenize_text(TEN_WORDS, method="ngram", size=1) == TEN_WORDS.split()


@pytest.mark.parametrize("size", [0, -1, "3", 2.5, True])
def test_invalid_ngram_size_fails_fast(size):
    with pytest.raises(PipelineConfigError):
        build_tokenizer("ngram", size=size)


# ---------------------------------------------------------------------------
# Sentence and tweet modes
# ---------------------------------------------------------------------------


def test_sentence_mode():
    sentences = tokenize_text("Hello world. How are you? I am fine!", method="sentence")
    assert sentences == ["Hello world.", "How are you?", "I am fine!"]


def test_tweet_mode_keeps_hashtags_mentions_urls():
    tokens = tokenize_text("Loving #NLP with @bob https://example.com :)", method="tweet")
    assert tokens == ["Loving", "#NLP", "with", "@bob", "https://example.com", ":)"]


def test_tweet_mode_options():
    tokens = tokenize_text("@bob sooooo good", method="tweet", strip_handles=True, reduce_len=True)
    assert tokens == ["sooo", "good"]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def test_build_from_config():
    tokenizer = build_tokenizer_from_config({"method": "ngram", "size": 2})
    assert tokenizer.tokenize("a b c") == ["a b", "b c"]
    assert build_tokenizer_from_config(None).name == "word"


def test_unknown_method_fails_fast():
    with pytest.raises(PipelineConfigError):
        build_tokenizer("characters")


def test_unexpected_option_fails_fast():
    with pytest.raises(PipelineConfigError):
        build_tokenizer("word", size=2)


def test_register_custom_tokenizer():
    class WhitespaceTokenizer:
        name = "whitespace"

        def tokenize(self, text):
            return text.split()

    register_tokenizer("whitespace", WhitespaceTokenizer)
    try:
        assert tokenize_text("a,b c", method="whitespace") == ["a,b", "c"]
    finally:
        TOKENIZERS.pop("whitespace", None)
