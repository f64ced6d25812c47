"""
Tests for token filters and the filter chain.

These tests validate that:

- stopword removal is exact: case-insensitive, includes apostrophe-stripped
  variants of the list, and removes nothing else
- each named filter drops what it should and keeps the rest
- filters combine by logical AND
- tagged tokens keep their document id through filtering
- unknown filters and options fail when the chain is built
"""

from __future__ import annotations

import pytest

from textclean.data.resources import stopword_variants
from textclean.features.filters import (
    AlphabeticFilter,
    FILTERS,
    CustomFilter,
    FilterChain,
    HashtagFilter,
    MentionFilter,
    MinLengthFilter,
    NumericFilter,
    PunctuationFilter,
    StopwordFilter,
    TaggedToken,
    UrlFilter,
    build_filter_chain,
    register_filter,
)
from textclean.utils.run_utils import PipelineConfigError


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


STOPWORDS = {"the", "don't", "Is"}
TOKENS = ["The", "cat", "dont", "DON'T", "is", "isnt", "won't", "cats", "THE"]


def test_stopword_filter_removes_listed_words_and_variants():
    kept = FilterChain([StopwordFilter(STOPWORDS)]).apply(TOKENS)
    assert kept == ["cat", "isnt", "won't", "cats"]


def test_stopword_filter_is_exact():
    variants = stopword_variants(STOPWORDS)
    stop = StopwordFilter(STOPWORDS)
    for token in TOKENS:
        assert stop.keep(token) == (token.lower() not in variants)


def test_stopwords_from_config_source():
    chain = build_filter_chain({"enabled": ["stopwords"], "stopwords": {"source": "sklearn"}})
    assert chain.apply(["the", "python", "and", "tokenizer"]) == ["python", "tokenizer"]


def test_stopwords_from_explicit_word_list():
    chain = build_filter_chain({"enabled": ["stopwords"], "stopwords": {"words": ["foo"]}})
    assert chain.apply(["foo", "bar", "FOO"]) == ["bar"]


def test_unknown_stopword_option_fails_fast():
    with pytest.raises(PipelineConfigError):
        build_filter_chain({"enabled": ["stopwords"], "stopwords": {"sauce": "nltk"}})


# ---------------------------------------------------------------------------
# Individual filters
# ---------------------------------------------------------------------------


def test_alphabetic_filter():
    tokens = ["abc", "123", "a1", "!!!", "é"]
    assert FilterChain([AlphabeticFilter()]).apply(tokens) == ["abc", "a1"]
    assert FilterChain([AlphabeticFilter("a-zà-ÿ")]).apply(tokens) == ["abc", "a1", "é"]


def test_alphabetic_filter_rejects_bad_alphabet():
    with pytest.raises(PipelineConfigError):
        AlphabeticFilter("z-a")


def test_numeric_filter():
    tokens = ["42", "3.14", "1,000", "-5", "50%", ".5", "a1", "v2.0"]
    assert FilterChain([NumericFilter()]).apply(tokens) == ["a1", "v2.0"]


def test_url_filter():
    tokens = ["https://example.com", "www.google.com", "example", "ftp://host/path"]
    assert FilterChain([UrlFilter()]).apply(tokens) == ["example"]


def test_hashtag_filter():
    tokens = ["#python", "#2020", "python", "#"]
    assert FilterChain([HashtagFilter()]).apply(tokens) == ["#2020", "python", "#"]


def test_mention_filter():
    tokens = ["@bob", "bob", "@", "email@x.com"]
    assert FilterChain([MentionFilter()]).apply(tokens) == ["bob", "@", "email@x.com"]


def test_punctuation_filter():
    tokens = ["...", "!?", "word", "—", ":)", "don't"]
    assert FilterChain([PunctuationFilter()]).apply(tokens) == ["word", "don't"]


def test_custom_filter():
    tokens = ["rt", "RT", "amp", "ramp"]
    assert FilterChain([CustomFilter(["RT", "amp"])]).apply(tokens) == ["ramp"]


def test_min_length_filter():
    assert FilterChain([MinLengthFilter(3)]).apply(["a", "ab", "abc"]) == ["abc"]
    with pytest.raises(PipelineConfigError):
        MinLengthFilter(-1)


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------


def test_filters_combine_with_and():
    chain = build_filter_chain(
        {"enabled": ["stopwords", "alphabetic", "mentions", "custom"], "custom_exclusions": ["rt"]},
        stopwords=["the"],
    )
    tokens = ["RT", "@bob", "the", "2024", "match", "was", "great"]
    assert chain.apply(tokens) == ["match", "was", "great"]
    assert chain.names == ["stopwords", "alphabetic", "mentions", "custom"]


def test_empty_result_is_empty_list():
    chain = build_filter_chain({"enabled": ["stopwords"]}, stopwords=["a"])
    assert chain.apply(["a", "A"]) == []
    assert chain.apply([]) == []


def test_no_filters_keeps_everything():
    assert build_filter_chain({}).apply(["x", "1", "#y"]) == ["x", "1", "#y"]


def test_tagged_tokens_keep_their_document():
    tagged = [
        TaggedToken("d1", 0, "the"),
        TaggedToken("d1", 1, "cat"),
        TaggedToken("d2", 0, "a"),
        TaggedToken("d2", 1, "dog"),
        TaggedToken("d3", 0, "the"),
    ]
    chain = build_filter_chain({"enabled": ["stopwords"]}, stopwords=["the", "a"])
    kept = chain.apply_tagged(tagged)

    assert kept == [TaggedToken("d1", 1, "cat"), TaggedToken("d2", 1, "dog")]
    for t in kept:
        assert t in tagged


def test_unknown_filter_fails_fast():
    with pytest.raises(PipelineConfigError):
        build_filter_chain({"enabled": ["stopwords", "emoji"]}, stopwords=[])


def test_unknown_chain_option_fails_fast():
    with pytest.raises(PipelineConfigError):
        build_filter_chain({"enabled": [], "alphabett": "a-z"})


def test_stopwords_as_plain_list():
    chain = build_filter_chain({"enabled": ["stopwords"], "stopwords": ["Foo"]})
    assert chain.apply(["foo", "bar"]) == ["bar"]


def test_register_custom_filter():
    class NoDigits:
        name = "no_digits"

        def keep(self, token):
            return not any(ch.isdigit() for ch in token)

    register_filter("no_digits", lambda options, stopwords: NoDigits())
    try:
        chain = build_filter_chain({"enabled": ["no_digits"]})
        assert chain.apply(["a1", "b"]) == ["b"]
    finally:
        FILTERS.pop("no_digits", None)


def test_stopwords_match_curly_apostrophes():
    stop = StopwordFilter(["don't"])
    assert FilterChain([stop]).apply(["don’t", "Don’t", "dont", "cat"]) == ["cat"]
