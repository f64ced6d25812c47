"""
Tests for static lexical resources (stopwords, contractions, abbreviations).
"""

from __future__ import annotations

import pytest

from textclean.data.resources import (
    DEFAULT_ABBREVIATIONS,
    load_abbreviations,
    load_contractions,
    load_stopwords,
    stopword_variants,
)
from textclean.utils.run_utils import PipelineConfigError


def test_stopword_variants_adds_apostrophe_free_forms():
    words = stopword_variants(["Don't", "the", "", "  "])
    assert words == frozenset({"don't", "dont", "the"})


def test_sklearn_stopwords_with_extra_and_exclude():
    words = load_stopwords(source="sklearn", extra=["RT"], exclude=["not"])
    assert "the" in words
    assert "rt" in words
    assert "not" not in words


def test_no_stopwords():
    assert load_stopwords(source="none", extra=["x"]) == frozenset({"x"})


def test_unknown_stopword_source():
    with pytest.raises(PipelineConfigError):
        load_stopwords(source="spacy")


def test_sklearn_stopwords_are_english_only():
    with pytest.raises(PipelineConfigError):
        load_stopwords(source="sklearn", language="german")


def test_contractions_accept_additions():
    mapping = load_contractions({"Gonna": "going to"})
    assert mapping["gonna"] == "going to"
    assert mapping["isn't"] == "is not"


def test_abbreviations_defaults_and_overrides():
    mapping = load_abbreviations({"MSU": "Michigan State University"})
    assert mapping["MSU"] == "Michigan State University"
    assert set(DEFAULT_ABBREVIATIONS) <= set(mapping)

    only = load_abbreviations({"MSU": "Michigan State University"}, use_defaults=False)
    assert only == {"MSU": "Michigan State University"}


def test_abbreviations_can_be_inverted():
    mapping = load_abbreviations({"MSU": "Michigan State University"}, use_defaults=False, direction="contract")
    assert mapping == {"Michigan State University": "MSU"}


def test_unknown_abbreviation_direction():
    with pytest.raises(PipelineConfigError):
        load_abbreviations(direction="sideways")
