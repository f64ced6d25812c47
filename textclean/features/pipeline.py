"""
The text-cleaning pipeline.

A TextPipeline chains four stages, each built once from the
"preprocessing" section of config/data.yaml:

    normalize -> tokenize -> filter -> reduce

Every option is validated while the pipeline is built, so a misconfigured
run fails before the first document is touched. Documents are processed
independently; the only shared state is the read-only resources (stopwords,
contraction and abbreviation maps) held by the stages.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from textclean.data.datasets import DEFAULT_DATA_CONFIG_PATH, Document, iter_documents, load_data_config
from textclean.features.filters import FilterChain, StopwordFilter, TaggedToken, build_filter_chain
from textclean.features.normalization import Normalizer, coerce_text
from textclean.features.reduction import IdentityReducer, build_reducer_from_config
from textclean.features.tokenization import WordTokenizer, build_tokenizer_from_config
from textclean.utils.run_utils import PipelineConfigError, get_section

logger = logging.getLogger(__name__)

TOKEN_COLUMNS = ["doc_id", "position", "token"]

_PREPROCESSING_SECTIONS = {"normalization", "tokenize", "filters", "reduction"}


class TextPipeline:
    """
    Normalize, tokenize, filter and reduce text.

    Parameters
    ----------
    normalizer : Normalizer
    tokenizer : object with ``tokenize(text) -> List[str]``
    filter_chain : FilterChain
    reducer : object with ``reduce(token) -> str``
    refilter_after_reduction : bool
        Run the stopword filters again on reduced tokens.
    """

    def __init__(
        self,
        normalizer: Optional[Normalizer] = None,
        tokenizer: Any = None,
        filter_chain: Optional[FilterChain] = None,
        reducer: Any = None,
        refilter_after_reduction: bool = False,
    ):
        self.normalizer = normalizer or Normalizer()
        self.tokenizer = tokenizer or WordTokenizer()
        self.filter_chain = filter_chain or FilterChain()
        self.reducer = reducer or IdentityReducer()
        self.refilter_after_reduction = refilter_after_reduction
        self._post_chain = FilterChain(
            [f for f in self.filter_chain.filters if isinstance(f, StopwordFilter)]
        )

    # ------------------------------------------------------------------
    # Single texts
    # ------------------------------------------------------------------

    def _tokens_with_positions(self, text: str) -> List[tuple]:
        normalized = self.normalizer.normalize(text)
        tokens = self.tokenizer.tokenize(normalized)
        kept = [(i, t) for i, t in enumerate(tokens) if self.filter_chain.keep(t)]
        reduced = [(i, self.reducer.reduce(t)) for i, t in kept]
        if self.refilter_after_reduction and len(self._post_chain):
            reduced = [(i, t) for i, t in reduced if self._post_chain.keep(t)]
        return reduced

    def process_text(self, text: Any) -> List[str]:
        """
        Run the full pipeline on one text and return its tokens.

        Non-string input is treated as the empty string.
        """
        text, _ = coerce_text(text)
        return [t for _, t in self._tokens_with_positions(text)]

    def process_to_string(self, text: Any) -> str:
        """Run the pipeline and join the tokens with single spaces."""
        return " ".join(self.process_text(text))

    __call__ = process_text

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def tag_document(self, doc: Document) -> List[TaggedToken]:
        """Process one document; every token carries the document's id."""
        text, _ = coerce_text(doc.text)
        return [TaggedToken(doc.doc_id, i, t) for i, t in self._tokens_with_positions(text)]

    def process_documents(
        self,
        documents: Union[pd.DataFrame, Iterable[Document]],
    ) -> pd.DataFrame:
        """
        Process a batch of documents.

        Parameters
        ----------
        documents : pd.DataFrame or Iterable[Document]
            A frame with "doc_id" and "text" columns (as produced by
            ``load_tweet_dataset``) or Document tuples.

        Returns
        -------
        pd.DataFrame
            Long format, one row per surviving token, with columns
            ["doc_id", "position", "token"], in input order.
        """
        if isinstance(documents, pd.DataFrame):
            docs = iter_documents(documents)
        else:
            docs = [d if isinstance(d, Document) else Document(*d) for d in documents]

        rows: List[TaggedToken] = []
        malformed = 0
        empty = 0
        for doc in docs:
            _, bad = coerce_text(doc.text)
            malformed += int(bad)
            tagged = self.tag_document(doc)
            if not tagged:
                empty += 1
            rows.extend(tagged)

        if malformed:
            logger.warning("Coerced %d non-string record(s) to empty text.", malformed)
        logger.info(
            "Processed %d documents into %d tokens (%d documents empty after filtering).",
            len(docs),
            len(rows),
            empty,
        )
        return pd.DataFrame(rows, columns=TOKEN_COLUMNS)

    def process_series(self, series: pd.Series) -> pd.Series:
        """
        Apply the pipeline to a Series of raw texts and return a Series of
        cleaned strings with the same index.
        """
        return series.apply(self.process_to_string)

    def describe(self) -> Dict[str, Any]:
        return {
            "tokenizer": getattr(self.tokenizer, "name", type(self.tokenizer).__name__),
            "filters": self.filter_chain.names,
            "reducer": getattr(self.reducer, "name", type(self.reducer).__name__),
        }


# ---------------------------------------------------------------------------
# Construction from configuration
# ---------------------------------------------------------------------------


def build_pipeline(
    preprocessing_cfg: Optional[Mapping[str, Any]] = None,
    stopwords: Optional[Iterable[str]] = None,
) -> TextPipeline:
    """
    Build a TextPipeline from the "preprocessing" config section.

    Parameters
    ----------
    preprocessing_cfg : Mapping
        Section with optional "normalization", "tokenize", "filters" and
        "reduction" sub-sections.
    stopwords : Optional[Iterable[str]]
        Stopword list overriding the configured source.

    Raises
    ------
    PipelineConfigError
        On any unknown section, strategy, filter or option.
    """
    cfg = dict(preprocessing_cfg or {})
    unknown = sorted(set(cfg) - _PREPROCESSING_SECTIONS)
    if unknown:
        raise PipelineConfigError(
            f"Unknown preprocessing section(s): {unknown}. "
            f"Expected any of: {sorted(_PREPROCESSING_SECTIONS)}."
        )

    filters_cfg = get_section(cfg, "filters")
    pipeline = TextPipeline(
        normalizer=Normalizer.from_config(get_section(cfg, "normalization")),
        tokenizer=build_tokenizer_from_config(get_section(cfg, "tokenize")),
        filter_chain=build_filter_chain(filters_cfg, stopwords=stopwords),
        reducer=build_reducer_from_config(get_section(cfg, "reduction")),
        refilter_after_reduction=bool(filters_cfg.get("after_reduction", False)),
    )
    logger.debug("Built pipeline: %s", pipeline.describe())
    return pipeline


def build_pipeline_from_file(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
    stopwords: Optional[Iterable[str]] = None,
) -> TextPipeline:
    """Build a TextPipeline from the "preprocessing" section of a data config file."""
    cfg = load_data_config(config_path)
    return build_pipeline(cfg["preprocessing"], stopwords=stopwords)
