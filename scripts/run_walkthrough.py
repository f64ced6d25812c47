"""
Step-by-step walkthrough of the cleaning stages on example strings.

Each stage is run on its own so its effect is visible in the log:

1) case folding, contraction expansion, abbreviation substitution
2) word / n-gram / sentence / tweet tokenization
3) stopword, URL, number, hashtag and mention filtering
4) stemming and lemmatization
5) token frequencies of the cleaned examples

Usage (from project root):

    python -m scripts.run_walkthrough
    # or
    python scripts/run_walkthrough.py --stopwords sklearn
"""

from __future__ import annotations

import argparse

from textclean.data.resources import load_stopwords
from textclean.evaluation.frequency import FrequencyTable
from textclean.features.filters import build_filter_chain
from textclean.features.normalization import (
    Normalizer,
    NormalizerConfig,
    expand_contractions,
    remove_urls,
    substitute_abbreviations,
)
from textclean.features.pipeline import build_pipeline
from textclean.features.reduction import build_reducer
from textclean.features.tokenization import build_tokenizer
from textclean.utils.run_utils import get_logger, load_run_config


EXAMPLES = [
    "A character string",
    "This isn't the first example, and it won't be the last!",
    "MSU is great. The Spartans play at Spartan Stadium in East Lansing.",
    "Check out https://example.com/article?id=42 @TechNews #NLP #python 2024",
    "Studies show runners were running faster than the better runner ran.",
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Walk through each text-cleaning stage on example strings."
    )
    parser.add_argument(
        "--run-config",
        type=str,
        default="config/run.yaml",
        help="Path to run config YAML (default: config/run.yaml).",
    )
    parser.add_argument(
        "--stopwords",
        type=str,
        default="nltk",
        choices=["nltk", "sklearn", "none"],
        help="Stopword list to use (default: nltk).",
    )
    parser.add_argument(
        "--lemmatize",
        action="store_true",
        help="Also show WordNet lemmatization (downloads the corpus if needed).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    run_cfg = load_run_config(args.run_config)
    logger = get_logger(name="run_walkthrough", config=run_cfg, log_file_suffix="walkthrough")

    # ------------------------------------------------------------------
    # 1) Normalization
    # ------------------------------------------------------------------
    logger.info("=" * 80)
    logger.info("Normalization")
    lower = Normalizer(NormalizerConfig(case="lower", expand_contractions=False, remove_urls=False))
    upper = Normalizer(NormalizerConfig(case="upper", expand_contractions=False, remove_urls=False))
    for text in EXAMPLES[:2]:
        logger.info("lower:        %r -> %r", text, lower(text))
        logger.info("upper:        %r -> %r", text, upper(text))
    logger.info("contractions: %r", expand_contractions(EXAMPLES[1]))
    logger.info(
        "abbreviation: %r",
        substitute_abbreviations(EXAMPLES[2], {"MSU": "Michigan State University"}),
    )
    logger.info(
        "contract:     %r",
        substitute_abbreviations(
            "Michigan State University is great", {"Michigan State University": "MSU"}
        ),
    )
    logger.info("remove URLs:  %r", remove_urls(EXAMPLES[3]))

    # ------------------------------------------------------------------
    # 2) Tokenization
    # ------------------------------------------------------------------
    logger.info("=" * 80)
    logger.info("Tokenization")
    text = lower(EXAMPLES[1])
    logger.info("word:     %s", build_tokenizer("word").tokenize(text))
    logger.info("bigrams:  %s", build_tokenizer("ngram", size=2).tokenize(text))
    logger.info("trigrams: %s", build_tokenizer("ngram", size=3).tokenize(text))
    logger.info("sentence: %s", build_tokenizer("sentence").tokenize(EXAMPLES[2]))
    logger.info("tweet:    %s", build_tokenizer("tweet").tokenize(EXAMPLES[3]))

    # ------------------------------------------------------------------
    # 3) Filtering
    # ------------------------------------------------------------------
    logger.info("=" * 80)
    logger.info("Filtering")
    stopwords = load_stopwords(source=args.stopwords)
    logger.info("Loaded %d stopwords from %s.", len(stopwords), args.stopwords)
    tweet_tokens = build_tokenizer("tweet").tokenize(EXAMPLES[3])
    for names in (["stopwords"], ["urls", "mentions", "hashtags"], ["numbers", "punctuation"]):
        chain = build_filter_chain({"enabled": names}, stopwords=stopwords)
        logger.info("%-32s %s", ", ".join(names) + ":", chain.apply(tweet_tokens))
    words = build_tokenizer("word").tokenize(lower(EXAMPLES[1]))
    no_stop = build_filter_chain({"enabled": ["stopwords"]}, stopwords=stopwords).apply(words)
    logger.info("stopwords removed:               %s", no_stop)

    # ------------------------------------------------------------------
    # 4) Morphological reduction
    # ------------------------------------------------------------------
    logger.info("=" * 80)
    logger.info("Stemming / lemmatization")
    words = build_tokenizer("word").tokenize(lower(EXAMPLES[4]))
    for algorithm in ("porter", "snowball", "lancaster"):
        logger.info("%-10s %s", algorithm, build_reducer("stem", algorithm=algorithm).reduce_all(words))
    if args.lemmatize:
        logger.info("%-10s %s", "wordnet", build_reducer("lemma").reduce_all(words))
        logger.info("%-10s %s", "wordnet-v", build_reducer("lemma", pos="v").reduce_all(words))

    # ------------------------------------------------------------------
    # 5) Frequencies over the cleaned examples
    # ------------------------------------------------------------------
    logger.info("=" * 80)
    logger.info("Token frequencies")
    pipeline = build_pipeline(
        {
            "normalization": {"case": "lower", "remove_mentions": True},
            "tokenize": {"method": "word"},
            "filters": {"enabled": ["stopwords", "alphabetic"]},
            "reduction": {"mode": "stem"},
        },
        stopwords=stopwords,
    )
    tokens = [t for text in EXAMPLES for t in pipeline.process_text(text)]
    table = FrequencyTable.from_tokens(tokens)
    logger.info("Top tokens:\n%s", table.to_frame(10).to_string(index=False))

    logger.info("Walkthrough completed.")


if __name__ == "__main__":
    main()
