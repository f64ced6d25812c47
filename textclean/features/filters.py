"""
Token filters and the chain that combines them.

Each filter is a small object exposing ``keep(token) -> bool``. A
FilterChain keeps a token only if every enabled filter keeps it. Filters
are selected by name in the "filters" section of config/data.yaml:

    filters:
      enabled: [stopwords, alphabetic, urls, mentions]
      stopwords: {source: nltk, language: english}
      custom_exclusions: [rt, amp]
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Sequence

from textclean.data.resources import load_stopwords, stopword_variants
from textclean.features.normalization import URL_PATTERN
from textclean.utils.run_utils import PipelineConfigError


class TaggedToken(NamedTuple):
    """A token together with the document it came from and its position there."""

    doc_id: Any
    position: int
    token: str


_NUMBER_TOKEN = re.compile(r"[+-]?(?:\d+(?:[.,]\d+)*|[.,]\d+)%?")


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class StopwordFilter:
    """
    Drop tokens found, case-insensitively, in the stopword set or in its
    apostrophe-stripped variants.
    """

    name = "stopwords"

    def __init__(self, stopwords: Iterable[str]):
        self.stopwords: FrozenSet[str] = stopword_variants(stopwords)

    def keep(self, token: str) -> bool:
        return token.lower().replace("’", "'") not in self.stopwords


class AlphabeticFilter:
    """Keep tokens containing at least one letter of the alphabet."""

    name = "alphabetic"

    def __init__(self, alphabet: str = "a-z"):
        try:
            self._letter = re.compile(f"[{alphabet}]", re.IGNORECASE)
        except re.error as exc:
            raise PipelineConfigError(f"Invalid alphabet character class {alphabet!r}: {exc}") from exc

    def keep(self, token: str) -> bool:
        return self._letter.search(token) is not None


class NumericFilter:
    name = "numbers"

    def keep(self, token: str) -> bool:
        return _NUMBER_TOKEN.fullmatch(token) is None


class UrlFilter:
    name = "urls"

    def keep(self, token: str) -> bool:
        return URL_PATTERN.fullmatch(token) is None


class HashtagFilter:
    """Drop tokens made of the marker followed by a letter ("#python")."""

    name = "hashtags"

    def __init__(self, marker: str = "#"):
        self._pattern = re.compile(rf"{re.escape(marker)}[^\W\d_]")

    def keep(self, token: str) -> bool:
        return self._pattern.match(token) is None


class MentionFilter:
    name = "mentions"

    def __init__(self, marker: str = "@"):
        self._pattern = re.compile(rf"{re.escape(marker)}\w")

    def keep(self, token: str) -> bool:
        return self._pattern.match(token) is None


class PunctuationFilter:
    """Drop tokens made only of punctuation or symbol characters."""

    name = "punctuation"

    def keep(self, token: str) -> bool:
        return not all(unicodedata.category(ch)[0] in "PS" for ch in token)


class CustomFilter:
    name = "custom"

    def __init__(self, exclusions: Iterable[str] = ()):
        self.exclusions = frozenset(str(w).lower() for w in exclusions)

    def keep(self, token: str) -> bool:
        return token.lower() not in self.exclusions


class MinLengthFilter:
    name = "min_length"

    def __init__(self, min_length: int = 2):
        if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length < 0:
            raise PipelineConfigError(f"min_length must be a non-negative integer, got {min_length!r}.")
        self.min_length = min_length

    def keep(self, token: str) -> bool:
        return len(token) >= self.min_length


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------


class FilterChain:
    """Logical AND of filters, applied in order."""

    def __init__(self, filters: Sequence[Any] = ()):
        self.filters = list(filters)

    @property
    def names(self) -> List[str]:
        return [getattr(f, "name", type(f).__name__) for f in self.filters]

    def keep(self, token: str) -> bool:
        return all(f.keep(token) for f in self.filters)

    def apply(self, tokens: Iterable[str]) -> List[str]:
        return [t for t in tokens if self.keep(t)]

    def apply_tagged(self, tagged: Iterable[TaggedToken]) -> List[TaggedToken]:
        """Filter tagged tokens; survivors keep their doc_id and position."""
        return [t for t in tagged if self.keep(t.token)]

    def __len__(self) -> int:
        return len(self.filters)


def _build_stopwords(options: Mapping[str, Any], stopwords: Optional[Iterable[str]]) -> StopwordFilter:
    if stopwords is not None:
        return StopwordFilter(stopwords)
    raw = options.get("stopwords") or {}
    if isinstance(raw, (list, tuple, set, frozenset)):
        return StopwordFilter(raw)
    sw_cfg = dict(raw)
    words = sw_cfg.pop("words", None)
    if words is not None:
        return StopwordFilter(words)
    unknown = sorted(set(sw_cfg) - {"source", "language", "extra", "exclude"})
    if unknown:
        raise PipelineConfigError(f"Unknown stopword option(s): {unknown}.")
    return StopwordFilter(
        load_stopwords(
            source=sw_cfg.get("source", "nltk"),
            language=sw_cfg.get("language", "english"),
            extra=sw_cfg.get("extra") or (),
            exclude=sw_cfg.get("exclude") or (),
        )
    )


FILTERS: Dict[str, Callable[[Mapping[str, Any], Optional[Iterable[str]]], Any]] = {
    "stopwords": _build_stopwords,
    "alphabetic": lambda o, _: AlphabeticFilter(o.get("alphabet", "a-z")),
    "numbers": lambda o, _: NumericFilter(),
    "urls": lambda o, _: UrlFilter(),
    "hashtags": lambda o, _: HashtagFilter(o.get("hashtag_marker", "#")),
    "mentions": lambda o, _: MentionFilter(o.get("mention_marker", "@")),
    "punctuation": lambda o, _: PunctuationFilter(),
    "custom": lambda o, _: CustomFilter(o.get("custom_exclusions") or ()),
    "min_length": lambda o, _: MinLengthFilter(o.get("min_length", 2)),
}

_CHAIN_OPTIONS = {
    "enabled",
    "stopwords",
    "alphabet",
    "hashtag_marker",
    "mention_marker",
    "custom_exclusions",
    "min_length",
    "after_reduction",
}


def register_filter(name: str, builder: Callable[[Mapping[str, Any], Optional[Iterable[str]]], Any]) -> None:
    """Make a new filter selectable by name."""
    FILTERS[name.lower()] = builder


def build_filter_chain(
    cfg: Optional[Mapping[str, Any]] = None,
    stopwords: Optional[Iterable[str]] = None,
) -> FilterChain:
    """
    Build a FilterChain from the "filters" config section.

    Parameters
    ----------
    cfg : Mapping
        Section with an "enabled" list of filter names and their options.
    stopwords : Optional[Iterable[str]]
        Stopword list to use instead of loading one from the configuration.

    Raises
    ------
    PipelineConfigError
        On an unknown filter name or option.
    """
    options = dict(cfg or {})
    unknown_opts = sorted(set(options) - _CHAIN_OPTIONS)
    if unknown_opts:
        raise PipelineConfigError(f"Unknown filter option(s): {unknown_opts}.")

    enabled = options.get("enabled") or []
    if isinstance(enabled, str):
        enabled = [enabled]

    unknown = [n for n in enabled if str(n).lower() not in FILTERS]
    if unknown:
        raise PipelineConfigError(
            f"Unknown filter(s): {unknown}. Expected any of: {', '.join(sorted(FILTERS))}."
        )

    return FilterChain([FILTERS[str(n).lower()](options, stopwords) for n in enabled])
