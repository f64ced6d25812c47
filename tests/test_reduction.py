"""
Tests for stemming and lemmatization.

These tests validate that:

- stemming is idempotent: stem(stem(t)) == stem(t), for every algorithm
- reduced tokens are fixed points of the underlying NLTK stemmer
- lemmatization maps inflected forms to base forms (when WordNet is present)
- unknown modes and algorithms fail when the reducer is built

WordNet-dependent tests are skipped if the corpus is not installed, so the
suite still runs offline.
"""

from __future__ import annotations

import nltk
import pytest
from nltk.stem import PorterStemmer

from textclean.features.reduction import (
    IdentityReducer,
    Lemmatizer,
    Stemmer,
    build_reducer,
    build_reducer_from_config,
    lemmatize_tokens,
    stem_tokens,
)
from textclean.utils.run_utils import PipelineConfigError


WORDS = [
    "running", "runs", "ran", "studies", "studying", "agreed", "generalization",
    "connection", "connected", "happiness", "relational", "conditional",
    "better", "tweets", "tweeting", "hopping", "hoping", "universities", "a", "",
]


def _wordnet_available() -> bool:
    try:
        nltk.data.find("corpora/wordnet")
        return True
    except LookupError:
        return False


# ---------------------------------------------------------------------------
# Stemming
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("algorithm", ["porter", "snowball", "lancaster"])
def test_stemming_is_idempotent(algorithm):
    stemmer = Stemmer(algorithm)
    fresh = Stemmer(algorithm)
    for word in WORDS:
        stem = stemmer.reduce(word)
        assert stemmer.reduce(stem) == stem
        assert fresh.reduce(stem) == stem


def test_stems_are_fixed_points_of_porter():
    porter = PorterStemmer()
    for word in WORDS:
        stem = Stemmer("porter").reduce(word)
        if stem:
            assert porter.stem(stem) == stem


def test_porter_examples():
    assert stem_tokens(["running", "connected", "connection"]) == ["run", "connect", "connect"]


def test_unknown_stemming_algorithm():
    with pytest.raises(PipelineConfigError):
        Stemmer("krovetz")


def test_snowball_unknown_language():
    with pytest.raises(PipelineConfigError):
        Stemmer("snowball", language="klingon")


# ---------------------------------------------------------------------------
# Lemmatization
# ---------------------------------------------------------------------------


@pytest.mark.skipif(not _wordnet_available(), reason="WordNet corpus not installed.")
def test_lemmatization_examples():
    assert Lemmatizer().reduce_all(["cats", "geese", "corpora"]) == ["cat", "goose", "corpus"]
    assert Lemmatizer(pos="v").reduce("running") == "run"
    assert lemmatize_tokens(["dogs", "mice"]) == ["dog", "mouse"]


@pytest.mark.skipif(not _wordnet_available(), reason="WordNet corpus not installed.")
def test_lemmatization_is_idempotent():
    lemmatizer = Lemmatizer()
    for word in WORDS:
        lemma = lemmatizer.reduce(word)
        assert lemmatizer.reduce(lemma) == lemma


def test_unknown_part_of_speech():
    with pytest.raises(PipelineConfigError):
        Lemmatizer(pos="x")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_identity_reducer():
    assert build_reducer("none").reduce_all(["Cats", "ran"]) == ["Cats", "ran"]
    assert isinstance(build_reducer_from_config(None), IdentityReducer)


def test_build_reducer_from_config():
    reducer = build_reducer_from_config({"mode": "stem", "algorithm": "snowball"})
    assert isinstance(reducer, Stemmer)
    assert reducer.algorithm == "snowball"


def test_unknown_mode_fails_fast():
    with pytest.raises(PipelineConfigError):
        build_reducer("morph")


def test_unexpected_option_fails_fast():
    with pytest.raises(PipelineConfigError):
        build_reducer("stem", pos="n")
