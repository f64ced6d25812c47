"""
Token frequency aggregation.

This module provides helpers to:
- count tokens (plain strings, tagged tokens or a token frame)
- rank them and keep the top-k
- count tokens per document and per time period
- save the tables as CSV for charting

Tables are always recomputed from the tokens of a run; nothing is updated
incrementally.
"""

from __future__ import annotations

import os
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from textclean.utils.run_utils import ensure_dir_exists


class FrequencyTable:
    """
    Occurrence count per distinct token.

    Ranking is by count, descending; tokens with equal counts keep the order
    in which they first occurred.
    """

    def __init__(self, counter: Optional[Counter] = None):
        self._counter: Counter = counter if counter is not None else Counter()

    @classmethod
    def from_tokens(cls, tokens: Any) -> "FrequencyTable":
        """
        Count tokens.

        Parameters
        ----------
        tokens : Iterable[str], Iterable[TaggedToken] or pd.DataFrame
            Plain tokens, tagged tokens (anything with a ``token`` attribute)
            or a token frame with a "token" column.
        """
        if isinstance(tokens, pd.DataFrame):
            values: Iterable[str] = tokens["token"]
        else:
            values = (getattr(t, "token", t) for t in tokens)
        # Counter keeps first-insertion order; most_common sorts stably.
        return cls(Counter(values))

    @property
    def counts(self) -> Dict[str, int]:
        return dict(self._counter)

    @property
    def total(self) -> int:
        return sum(self._counter.values())

    def __len__(self) -> int:
        return len(self._counter)

    def __getitem__(self, token: str) -> int:
        return self._counter[token]

    def most_common(self, k: Optional[int] = None) -> List[Tuple[str, int]]:
        return self._counter.most_common(k)

    def top_k(self, k: int) -> List[Tuple[str, int]]:
        """Return the k highest-count entries (fewer if there are fewer tokens)."""
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}.")
        return self._counter.most_common(k)

    def to_frame(self, k: Optional[int] = None) -> pd.DataFrame:
        """
        Return the ranking as a DataFrame with columns
        ["token", "count", "share"].
        """
        df = pd.DataFrame(self.most_common(k), columns=["token", "count"])
        total = self.total
        df["share"] = df["count"] / total if total else 0.0
        return df


def document_frequencies(tokens_frame: pd.DataFrame) -> pd.DataFrame:
    """
    Count tokens per document.

    Parameters
    ----------
    tokens_frame : pd.DataFrame
        Output of ``TextPipeline.process_documents``.

    Returns
    -------
    pd.DataFrame
        Columns ["doc_id", "token", "count"], documents in input order,
        tokens in order of first occurrence within each document.
    """
    if tokens_frame.empty:
        return pd.DataFrame(columns=["doc_id", "token", "count"])
    grouped = tokens_frame.groupby(["doc_id", "token"], sort=False, dropna=False).size()
    return grouped.rename("count").reset_index()


def top_tokens_by_period(
    tokens_frame: pd.DataFrame,
    documents: pd.DataFrame,
    freq: str = "D",
    k: int = 10,
) -> pd.DataFrame:
    """
    Top-k tokens per time period.

    Tokens are assigned to periods through the "timestamp" column of the
    documents frame; documents without a timestamp are skipped.

    Returns
    -------
    pd.DataFrame
        Columns ["period", "token", "count"], periods ascending, tokens by
        count descending within a period.
    """
    if "timestamp" not in documents.columns:
        raise ValueError("documents has no 'timestamp' column.")

    stamps = (
        documents[["doc_id", "timestamp"]]
        .drop_duplicates(subset="doc_id", keep="first")
        .dropna(subset=["timestamp"])
    )
    merged = tokens_frame.merge(stamps, on="doc_id", how="inner", validate="many_to_one")
    if merged.empty:
        return pd.DataFrame(columns=["period", "token", "count"])

    merged["period"] = merged["timestamp"].dt.to_period(freq).dt.start_time
    counts = (
        merged.groupby(["period", "token"], sort=False).size().rename("count").reset_index()
    )
    counts = counts.sort_values(["period", "count"], ascending=[True, False], kind="stable")
    return counts.groupby("period", sort=True).head(k).reset_index(drop=True)


def save_frequency_table(table: Any, path: str) -> str:
    """
    Save a FrequencyTable (or any DataFrame) as CSV and return the path.
    """
    df = table.to_frame() if isinstance(table, FrequencyTable) else table
    ensure_dir_exists(os.path.dirname(path))
    df.to_csv(path, index=False)
    return path
