"""
Morphological reduction: stemming and lemmatization.

Both reducers wrap NLTK and are applied until the token stops changing,
so reducing an already reduced token returns it unchanged. A single
Porter pass does not always have that property ("agreed" -> "agre" ->
"agr").
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from nltk.stem import LancasterStemmer, PorterStemmer, SnowballStemmer, WordNetLemmatizer

from textclean.data.resources import ensure_nltk_resource
from textclean.utils.run_utils import PipelineConfigError


STEMMER_ALGORITHMS = ("porter", "snowball", "lancaster")
WORDNET_POS = ("n", "v", "a", "r", "s")
REDUCTION_MODES = ("stem", "lemma", "none")

# Upper bound on passes when looking for a fixed point.
_MAX_PASSES = 50


class _FixedPointReducer:
    """Memoised token -> token mapping applied to a fixed point."""

    name = "none"

    def __init__(self):
        self._cache: Dict[str, str] = {}

    def _reduce_once(self, token: str) -> str:
        raise NotImplementedError

    def reduce(self, token: str) -> str:
        if not token:
            return token
        cached = self._cache.get(token)
        if cached is not None:
            return cached

        current = token
        for _ in range(_MAX_PASSES):
            nxt = self._reduce_once(current)
            if nxt == current or not nxt:
                break
            current = nxt

        self._cache[token] = current
        self._cache.setdefault(current, current)
        return current

    def reduce_all(self, tokens: Iterable[str]) -> List[str]:
        return [self.reduce(t) for t in tokens]

    __call__ = reduce


class Stemmer(_FixedPointReducer):
    """
    Rule-based truncation to a root (Porter, Snowball or Lancaster).

    Results may not be dictionary words ("studies" -> "studi").
    """

    name = "stem"

    def __init__(self, algorithm: str = "porter", language: str = "english"):
        super().__init__()
        algo = (algorithm or "porter").lower()
        if algo == "porter":
            self._stemmer = PorterStemmer()
        elif algo == "snowball":
            if language not in SnowballStemmer.languages:
                raise PipelineConfigError(f"Snowball has no stemmer for language {language!r}.")
            self._stemmer = SnowballStemmer(language)
        elif algo == "lancaster":
            self._stemmer = LancasterStemmer()
        else:
            raise PipelineConfigError(
                f"Unknown stemming algorithm {algorithm!r}. "
                f"Expected one of: {', '.join(STEMMER_ALGORITHMS)}."
            )
        self.algorithm = algo

    def _reduce_once(self, token: str) -> str:
        return self._stemmer.stem(token)


class Lemmatizer(_FixedPointReducer):
    """
    WordNet lemmatization without part-of-speech context.

    Every token is looked up with the same part of speech (noun by default).
    Requires the NLTK "wordnet" corpus; it is downloaded on first use.
    """

    name = "lemma"

    def __init__(self, pos: str = "n"):
        super().__init__()
        if pos not in WORDNET_POS:
            raise PipelineConfigError(
                f"Unknown WordNet part of speech {pos!r}. Expected one of: {', '.join(WORDNET_POS)}."
            )
        ensure_nltk_resource("corpora/wordnet", "wordnet")
        self.pos = pos
        self._lemmatizer = WordNetLemmatizer()

    def _reduce_once(self, token: str) -> str:
        return self._lemmatizer.lemmatize(token, pos=self.pos)


class IdentityReducer(_FixedPointReducer):
    name = "none"

    def _reduce_once(self, token: str) -> str:
        return token


def build_reducer(mode: str = "none", **options: Any) -> _FixedPointReducer:
    """
    Build the reducer for ``mode`` ("stem", "lemma" or "none").

    Options are passed to the reducer, e.g. ``algorithm="snowball"`` for
    stemming or ``pos="v"`` for lemmatization.
    """
    key = (mode or "none").lower()
    factories = {"stem": Stemmer, "lemma": Lemmatizer, "none": IdentityReducer}
    factory = factories.get(key)
    if factory is None:
        raise PipelineConfigError(
            f"Unknown reduction mode {mode!r}. Expected one of: {', '.join(REDUCTION_MODES)}."
        )
    try:
        return factory(**options)
    except TypeError as exc:
        raise PipelineConfigError(f"Invalid options for reduction mode {key!r}: {options}") from exc


def build_reducer_from_config(cfg: Optional[Mapping[str, Any]]) -> _FixedPointReducer:
    """Build a reducer from the "reduction" config section."""
    options = dict(cfg or {})
    mode = options.pop("mode", "none")
    return build_reducer(mode, **options)


def stem_tokens(tokens: Iterable[str], algorithm: str = "porter") -> List[str]:
    """Stem a list of tokens with a fresh Stemmer."""
    return Stemmer(algorithm).reduce_all(tokens)


def lemmatize_tokens(tokens: Iterable[str], pos: str = "n") -> List[str]:
    """Lemmatize a list of tokens with a fresh Lemmatizer."""
    return Lemmatizer(pos).reduce_all(tokens)
