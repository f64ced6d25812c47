"""
Tokenization strategies.

Each strategy is a small object with a ``tokenize(text) -> List[str]``
method, registered under a name so the pipeline can pick one from the
"tokenize" section of config/data.yaml:

- "word":     words with boundary punctuation stripped; contractions kept whole
- "ngram":    overlapping word n-grams of a fixed size, joined by spaces
- "sentence": sentences (NLTK Punkt with default parameters)
- "tweet":    NLTK's TweetTokenizer; hashtags, mentions and URLs stay atomic

New strategies are added with ``register_tokenizer``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from nltk.tokenize import PunktSentenceTokenizer, RegexpTokenizer, TweetTokenizer
from nltk.util import ngrams

from textclean.utils.run_utils import PipelineConfigError


WORD_PATTERN = r"\w+(?:['’]\w+)*"


class WordTokenizer:
    """Split on anything that is not part of a word."""

    name = "word"

    def __init__(self, pattern: str = WORD_PATTERN):
        self.pattern = pattern
        self._tokenizer = RegexpTokenizer(pattern)

    def tokenize(self, text: str) -> List[str]:
        if not text:
            return []
        return self._tokenizer.tokenize(text)


class NgramTokenizer:
    """
    Overlapping word n-grams.

    m words produce max(0, m - size + 1) n-grams, in original order.
    """

    name = "ngram"

    def __init__(self, size: int = 2, separator: str = " ", pattern: str = WORD_PATTERN):
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise PipelineConfigError(f"n-gram size must be a positive integer, got {size!r}.")
        self.size = size
        self.separator = separator
        self._words = WordTokenizer(pattern)

    def tokenize(self, text: str) -> List[str]:
        words = self._words.tokenize(text)
        if len(words) < self.size:
            return []
        return [self.separator.join(gram) for gram in ngrams(words, self.size)]


class SentenceTokenizer:
    """
    Sentence splitting with an untrained Punkt model.

    Abbreviations the model has not learned ("Dr.") may cause extra splits.
    """

    name = "sentence"

    def __init__(self):
        self._tokenizer = PunktSentenceTokenizer()

    def tokenize(self, text: str) -> List[str]:
        text = text.strip() if text else ""
        if not text:
            return []
        return self._tokenizer.tokenize(text)


class TweetModeTokenizer:
    """Keep hashtags, @mentions, URLs and emoticons as single tokens."""

    name = "tweet"

    def __init__(self, preserve_case: bool = True, reduce_len: bool = False, strip_handles: bool = False):
        self._tokenizer = TweetTokenizer(
            preserve_case=preserve_case,
            reduce_len=reduce_len,
            strip_handles=strip_handles,
        )

    def tokenize(self, text: str) -> List[str]:
        if not text:
            return []
        return self._tokenizer.tokenize(text)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


TOKENIZERS: Dict[str, Callable[..., Any]] = {
    WordTokenizer.name: WordTokenizer,
    NgramTokenizer.name: NgramTokenizer,
    SentenceTokenizer.name: SentenceTokenizer,
    TweetModeTokenizer.name: TweetModeTokenizer,
}


def register_tokenizer(name: str, factory: Callable[..., Any]) -> None:
    """Make a new tokenization strategy selectable by name."""
    TOKENIZERS[name.lower()] = factory


def build_tokenizer(method: str = "word", **options: Any):
    """
    Instantiate the tokenization strategy registered under ``method``.

    Raises
    ------
    PipelineConfigError
        If the method is unknown or the options do not fit it.
    """
    key = (method or "word").lower()
    factory = TOKENIZERS.get(key)
    if factory is None:
        raise PipelineConfigError(
            f"Unknown tokenization method {method!r}. "
            f"Expected one of: {', '.join(sorted(TOKENIZERS))}."
        )
    try:
        return factory(**options)
    except TypeError as exc:
        raise PipelineConfigError(
            f"Invalid options for tokenization method {key!r}: {options}"
        ) from exc


def build_tokenizer_from_config(cfg: Optional[Mapping[str, Any]]):
    """
    Build a tokenizer from the "tokenize" config section, e.g.
    ``{"method": "ngram", "size": 3}``.
    """
    options = dict(cfg or {})
    method = options.pop("method", "word")
    return build_tokenizer(method, **options)


def tokenize_text(text: str, method: str = "word", **options: Any) -> List[str]:
    """
    Tokenize a single string with the given method.

    Convenience wrapper; pipelines build the tokenizer once instead.
    """
    return build_tokenizer(method, **options).tokenize(text)
