"""
String-level normalization for tweets and other short texts.

Operations (each can be switched on or off in the "normalization"
section of config/data.yaml):

- abbreviation substitution ("idk" -> "I do not know")
- contraction expansion ("isn't" -> "is not")
- URL / mention / hashtag / number removal
- punctuation removal
- case folding (lower or upper)
- whitespace collapsing

Every operation accepts the empty string and returns it unchanged.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Pattern, Tuple

from textclean.data.resources import load_abbreviations, load_contractions
from textclean.utils.run_utils import PipelineConfigError


URL_PATTERN = re.compile(r"(?<!\w)(?:[a-zA-Z][a-zA-Z0-9+.\-]*://\S+|www\.\S+)")
# A run of adjacent tags ("#a#b", "##tag") is one match.
MENTION_PATTERN = re.compile(r"(?<!\w)@+\w+(?:@+\w+)*")
HASHTAG_PATTERN = re.compile(r"(?<!\w)#+\w+(?:#+\w+)*")
_HASH_MARKS = re.compile(r"#+")
NUMBER_PATTERN = re.compile(r"(?<![\w.])[+-]?\d+(?:[.,]\d+)*%?(?![\w])")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Apostrophes are handled separately so "don't" survives punctuation removal.
_PUNCTUATION = (set(string.punctuation) | set("“”‘«»…–—¡¿")) - {"'"}
_PUNCT_TABLE = str.maketrans({ch: " " for ch in _PUNCTUATION})
_STRAY_APOSTROPHE = re.compile(r"(?<!\w)'|'(?!\w)")

CASE_MODES = ("lower", "upper", "none")
HASHTAG_MODES = ("remove", "strip_marker")


# ---------------------------------------------------------------------------
# Input coercion
# ---------------------------------------------------------------------------


def coerce_text(value: Any) -> Tuple[str, bool]:
    """
    Turn a raw record into a string.

    Returns
    -------
    (text, malformed)
        ``malformed`` is True when the value was not a string; such values
        (None, NaN, numbers, ...) become "" so a batch never fails on them.
    """
    if isinstance(value, str):
        return value, False
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace"), False
    return "", True


# ---------------------------------------------------------------------------
# Standalone helpers
# ---------------------------------------------------------------------------


def _word_alternation(keys, flags: int = 0) -> Optional[Pattern[str]]:
    # Longest keys first so "can't've" wins over "can't".
    ordered = sorted({k for k in keys if k}, key=len, reverse=True)
    if not ordered:
        return None
    body = "|".join(re.escape(k) for k in ordered)
    return re.compile(rf"(?<!\w)(?:{body})(?!\w)", flags)


def _match_case(source: str, replacement: str) -> str:
    if len(source) > 1 and source.isupper():
        return replacement.upper()
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to one space and trim the ends."""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def remove_urls(text: str) -> str:
    """Delete scheme://host/path and www. forms."""
    return URL_PATTERN.sub("", text)


def remove_mentions(text: str) -> str:
    return MENTION_PATTERN.sub("", text)


def remove_hashtags(text: str, keep_word: bool = False) -> str:
    """Delete hashtags, or with keep_word only their "#" markers ("#a#b" -> "a b")."""
    if keep_word:
        return HASHTAG_PATTERN.sub(lambda m: _HASH_MARKS.sub(" ", m.group(0)).strip(), text)
    return HASHTAG_PATTERN.sub("", text)


def remove_numbers(text: str) -> str:
    return NUMBER_PATTERN.sub(" ", text)


def remove_punctuation(text: str) -> str:
    """
    Replace punctuation with spaces. Apostrophes inside words are kept.
    """
    text = text.replace("’", "'").translate(_PUNCT_TABLE)
    return _STRAY_APOSTROPHE.sub(" ", text)


def expand_contractions(
    text: str,
    contractions: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Expand English contractions ("isn't" -> "is not").

    Matching ignores case; the expansion follows the capitalization of the
    contraction ("Isn't" -> "Is not").
    """
    mapping = load_contractions() if contractions is None else contractions
    pattern = _word_alternation(mapping.keys(), re.IGNORECASE)
    return _expand_with(pattern, mapping, text)


def _expand_with(pattern: Optional[Pattern[str]], mapping: Mapping[str, str], text: str) -> str:
    if pattern is None or not text:
        return text
    text = text.replace("’", "'")

    def _repl(m: "re.Match[str]") -> str:
        found = m.group(0)
        return _match_case(found, mapping[found.lower()])

    return pattern.sub(_repl, text)


def substitute_abbreviations(
    text: str,
    abbreviations: Mapping[str, str],
    ignore_case: bool = False,
) -> str:
    """
    Replace whole-word occurrences of each key by its value.

    All keys are matched in a single pass with the longest key tried first,
    so a replacement is never substituted again.
    """
    return _AbbreviationSubstituter(abbreviations, ignore_case)(text)


class _AbbreviationSubstituter:
    def __init__(self, abbreviations: Mapping[str, str], ignore_case: bool = False):
        self.ignore_case = ignore_case
        if ignore_case:
            self.mapping = {k.lower(): v for k, v in abbreviations.items()}
        else:
            self.mapping = dict(abbreviations)
        self.pattern = _word_alternation(
            abbreviations.keys(), re.IGNORECASE if ignore_case else 0
        )

    def __call__(self, text: str) -> str:
        if self.pattern is None or not text:
            return text

        def _repl(m: "re.Match[str]") -> str:
            key = m.group(0).lower() if self.ignore_case else m.group(0)
            return self.mapping[key]

        return self.pattern.sub(_repl, text)


# ---------------------------------------------------------------------------
# Configurable normalizer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NormalizerConfig:
    """Switches for the Normalizer; mirrors the "normalization" config section."""

    case: str = "lower"
    expand_contractions: bool = True
    expand_abbreviations: bool = False
    abbreviations: Dict[str, str] = field(default_factory=dict)
    use_default_abbreviations: bool = True
    abbreviation_direction: str = "expand"
    abbreviation_ignore_case: bool = False
    contractions: Dict[str, str] = field(default_factory=dict)
    remove_urls: bool = True
    remove_mentions: bool = False
    remove_hashtags: bool = False
    hashtag_mode: str = "remove"
    remove_numbers: bool = False
    remove_punctuation: bool = False
    collapse_whitespace: bool = True

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]]) -> "NormalizerConfig":
        cfg = dict(cfg or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise PipelineConfigError(
                f"Unknown normalization option(s): {unknown}. Known options: {sorted(known)}."
            )
        for key in ("abbreviations", "contractions"):
            if cfg.get(key) is None:
                cfg.pop(key, None)
            elif not isinstance(cfg[key], Mapping):
                raise PipelineConfigError(f'"{key}" must be a mapping.')
        conf = cls(**cfg)
        conf.validate()
        return conf

    def validate(self) -> None:
        if self.case not in CASE_MODES:
            raise PipelineConfigError(
                f"Unknown case mode {self.case!r}. Expected one of: {', '.join(CASE_MODES)}."
            )
        if self.hashtag_mode not in HASHTAG_MODES:
            raise PipelineConfigError(
                f"Unknown hashtag mode {self.hashtag_mode!r}. "
                f"Expected one of: {', '.join(HASHTAG_MODES)}."
            )


class Normalizer:
    """
    Apply the enabled normalization steps to a string.

    Order: abbreviations, contractions, URL/mention/hashtag/number removal,
    punctuation, case folding, whitespace. When a removal changes the text,
    removals repeat until stable and substitutions run once more.
    """

    def __init__(self, config: Optional[NormalizerConfig] = None):
        self.config = config or NormalizerConfig()
        self.config.validate()
        cfg = self.config

        self._abbreviations = None
        if cfg.expand_abbreviations:
            mapping = load_abbreviations(
                cfg.abbreviations,
                use_defaults=cfg.use_default_abbreviations,
                direction=cfg.abbreviation_direction,
            )
            # Once text is case-folded, "U" and "u" must expand alike.
            self._abbreviations = _AbbreviationSubstituter(
                mapping, ignore_case=cfg.abbreviation_ignore_case or cfg.case != "none"
            )

        self._contractions = load_contractions(cfg.contractions)
        self._contraction_pattern = _word_alternation(
            self._contractions.keys(), re.IGNORECASE
        )

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]]) -> "Normalizer":
        return cls(NormalizerConfig.from_config(cfg))

    def normalize(self, text: str) -> str:
        cfg = self.config
        if not text:
            return ""

        text = self._substitute(text)
        # Removing one piece can expose another ("#b@a", "1#a", "u_x"), so
        # strip until nothing changes, then substitute once more.
        stripped = self._strip_markup(text)
        if stripped != text:
            while stripped != text:
                text, stripped = stripped, self._strip_markup(stripped)
            text = self._substitute(text)

        if cfg.case == "lower":
            text = text.lower()
        elif cfg.case == "upper":
            text = text.upper()

        if cfg.collapse_whitespace:
            text = collapse_whitespace(text)
        return text

    def _substitute(self, text: str) -> str:
        if self._abbreviations is not None:
            text = self._abbreviations(text)
        if self.config.expand_contractions:
            text = _expand_with(self._contraction_pattern, self._contractions, text)
        return text

    def _strip_markup(self, text: str) -> str:
        cfg = self.config
        if cfg.remove_urls:
            text = URL_PATTERN.sub(" ", text)
        if cfg.remove_mentions:
            text = remove_mentions(text)
        if cfg.remove_hashtags:
            text = remove_hashtags(text, keep_word=cfg.hashtag_mode == "strip_marker")
        if cfg.remove_numbers:
            text = remove_numbers(text)
        if cfg.remove_punctuation:
            text = remove_punctuation(text)
        return text

    __call__ = normalize
