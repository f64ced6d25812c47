"""
Static lexical resources used by the cleaning pipeline.

- stopword sets (NLTK corpus, with scikit-learn's English list as fallback)
- the contraction map used for expansion ("isn't" -> "is not")
- the abbreviation map used for literal substitution ("idk" -> "I do not know")
- a helper that makes sure an NLTK data package is available

All resources are built once per run and treated as read-only afterwards.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

import nltk
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS as SKLEARN_EN_STOPWORDS

from textclean.utils.run_utils import PipelineConfigError

logger = logging.getLogger(__name__)


STOPWORD_SOURCES = ("nltk", "sklearn", "none")

DEFAULT_CONTRACTIONS: Dict[str, str] = {
    "ain't": "am not",
    "aren't": "are not",
    "can't": "cannot",
    "can't've": "cannot have",
    "could've": "could have",
    "couldn't": "could not",
    "didn't": "did not",
    "doesn't": "does not",
    "don't": "do not",
    "hadn't": "had not",
    "hasn't": "has not",
    "haven't": "have not",
    "he'd": "he would",
    "he'll": "he will",
    "he's": "he is",
    "how'd": "how did",
    "how's": "how is",
    "i'd": "i would",
    "i'll": "i will",
    "i'm": "i am",
    "i've": "i have",
    "isn't": "is not",
    "it'd": "it would",
    "it'll": "it will",
    "it's": "it is",
    "let's": "let us",
    "might've": "might have",
    "must've": "must have",
    "mustn't": "must not",
    "needn't": "need not",
    "o'clock": "of the clock",
    "shan't": "shall not",
    "she'd": "she would",
    "she'll": "she will",
    "she's": "she is",
    "should've": "should have",
    "shouldn't": "should not",
    "that's": "that is",
    "there's": "there is",
    "they'd": "they would",
    "they'll": "they will",
    "they're": "they are",
    "they've": "they have",
    "wasn't": "was not",
    "we'd": "we would",
    "we'll": "we will",
    "we're": "we are",
    "we've": "we have",
    "weren't": "were not",
    "what's": "what is",
    "where's": "where is",
    "who's": "who is",
    "won't": "will not",
    "would've": "would have",
    "wouldn't": "would not",
    "y'all": "you all",
    "you'd": "you would",
    "you'll": "you will",
    "you're": "you are",
    "you've": "you have",
}

# Short forms frequently seen in tweets. Keys are matched as whole words.
DEFAULT_ABBREVIATIONS: Dict[str, str] = {
    "asap": "as soon as possible",
    "btw": "by the way",
    "fyi": "for your information",
    "idk": "I do not know",
    "imo": "in my opinion",
    "lol": "laughing out loud",
    "omg": "oh my god",
    "pls": "please",
    "thx": "thanks",
    "tbh": "to be honest",
    "u": "you",
    "ur": "your",
    "w/": "with",
}


# ---------------------------------------------------------------------------
# NLTK data
# ---------------------------------------------------------------------------


def ensure_nltk_resource(resource_path: str, package: str) -> None:
    """
    Make sure an NLTK data package is installed, downloading it quietly
    on first use.

    Parameters
    ----------
    resource_path : str
        Path understood by ``nltk.data.find``, e.g. "corpora/wordnet".
    package : str
        Package name understood by ``nltk.download``, e.g. "wordnet".

    Raises
    ------
    PipelineConfigError
        If the resource is still missing after the download attempt.
    """
    try:
        nltk.data.find(resource_path)
        return
    except LookupError:
        logger.info("NLTK resource %r not found; downloading %r.", resource_path, package)

    nltk.download(package, quiet=True)
    try:
        nltk.data.find(resource_path)
    except LookupError as exc:
        raise PipelineConfigError(
            f"NLTK resource {resource_path!r} is not available. "
            f"Install it with: python -m nltk.downloader {package}"
        ) from exc


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


def stopword_variants(words: Iterable[str]) -> FrozenSet[str]:
    """
    Lower-case a stopword list and add the apostrophe-stripped variant of
    every word that contains an internal apostrophe ("don't" -> "dont").
    """
    result = set()
    for word in words:
        w = str(word).strip().lower().replace("’", "'")
        if not w:
            continue
        result.add(w)
        stripped = w.replace("'", "")
        if stripped and stripped != w:
            result.add(stripped)
    return frozenset(result)


def _nltk_stopwords(language: str) -> Optional[FrozenSet[str]]:
    from nltk.corpus import stopwords as nltk_stopwords

    try:
        ensure_nltk_resource("corpora/stopwords", "stopwords")
        return frozenset(nltk_stopwords.words(language))
    except PipelineConfigError:
        return None
    except OSError as exc:
        # Raised by the corpus reader for a language it does not ship.
        raise PipelineConfigError(
            f"NLTK has no stopword list for language {language!r}."
        ) from exc


def load_stopwords(
    source: str = "nltk",
    language: str = "english",
    extra: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> FrozenSet[str]:
    """
    Build the stopword set for a run.

    We prefer the NLTK stopwords corpus, falling back to scikit-learn's
    English stopwords when the corpus cannot be obtained.

    Parameters
    ----------
    source : str
        "nltk", "sklearn" or "none".
    language : str
        Language name, e.g. "english".
    extra : Iterable[str]
        Words added to the set.
    exclude : Iterable[str]
        Words removed from the set (e.g. "not" for sentiment work).

    Returns
    -------
    FrozenSet[str]
        Lower-cased stopwords including apostrophe-stripped variants.
    """
    src = (source or "none").lower()
    lang = (language or "english").lower()

    if src not in STOPWORD_SOURCES:
        raise PipelineConfigError(
            f"Unknown stopword source {source!r}. Expected one of: {', '.join(STOPWORD_SOURCES)}."
        )

    if src == "none":
        base: FrozenSet[str] = frozenset()
    elif src == "nltk":
        words = _nltk_stopwords(lang)
        if words is None:
            if lang != "english":
                raise PipelineConfigError(
                    f"NLTK stopwords for {lang!r} are unavailable and no fallback exists."
                )
            logger.warning("NLTK stopwords unavailable; using scikit-learn's English list.")
            words = frozenset(SKLEARN_EN_STOPWORDS)
        base = words
    else:
        if lang != "english":
            raise PipelineConfigError("scikit-learn only provides English stopwords.")
        base = frozenset(SKLEARN_EN_STOPWORDS)

    removed = stopword_variants(exclude)
    words = stopword_variants(list(base) + list(extra or ()))
    return frozenset(w for w in words if w not in removed)


# ---------------------------------------------------------------------------
# Contractions and abbreviations
# ---------------------------------------------------------------------------


def load_contractions(extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Return the contraction map, lower-cased keys, with optional additions.
    """
    mapping = {k.lower(): v for k, v in DEFAULT_CONTRACTIONS.items()}
    for k, v in (extra or {}).items():
        mapping[str(k).lower().replace("’", "'")] = str(v)
    return mapping


def load_abbreviations(
    mapping: Optional[Mapping[str, str]] = None,
    use_defaults: bool = True,
    direction: str = "expand",
) -> Dict[str, str]:
    """
    Build the abbreviation map used for literal substitution.

    Parameters
    ----------
    mapping : Optional[Mapping[str, str]]
        Short form -> long form entries from the configuration.
    use_defaults : bool
        Start from DEFAULT_ABBREVIATIONS if True.
    direction : str
        "expand" substitutes short forms by long forms; "contract" inverts
        the map and substitutes long forms by short forms.

    Returns
    -------
    Dict[str, str]
        Pattern -> replacement map, in insertion order.
    """
    combined: Dict[str, str] = dict(DEFAULT_ABBREVIATIONS) if use_defaults else {}
    for k, v in (mapping or {}).items():
        combined[str(k)] = str(v)

    direction = (direction or "expand").lower()
    if direction == "expand":
        return combined
    if direction == "contract":
        return {long: short for short, long in combined.items()}
    raise PipelineConfigError(
        f"Unknown abbreviation direction {direction!r}. Expected 'expand' or 'contract'."
    )
