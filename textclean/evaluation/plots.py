"""
Exploratory plots for cleaned tweet corpora.

This module provides helpers to visualize:

- the most frequent tokens (bar chart)
- the number of tokens left per document (histogram)
- document volume over time (line chart)

Every function returns ``(fig, ax)``, optionally saves the figure to
``out_path`` and only calls ``plt.show()`` when ``show`` is True.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from textclean.evaluation.frequency import FrequencyTable


def _finish(fig, out_path: Optional[str], show: bool) -> None:
    fig.tight_layout()

    if out_path is not None:
        fig.savefig(out_path, dpi=300, bbox_inches="tight")

    if show:
        plt.show()
    else:
        plt.close(fig)


# ---------------------------------------------------------------------------
# Token frequencies
# ---------------------------------------------------------------------------


def plot_top_tokens(
    table: Union[FrequencyTable, pd.DataFrame],
    top_k: int = 20,
    horizontal: bool = True,
    figsize: Tuple[float, float] = (10.0, 6.0),
    title: Optional[str] = None,
    out_path: Optional[str] = None,
    show: bool = True,
):
    """
    Plot a bar chart of the top-k tokens.

    Parameters
    ----------
    table : FrequencyTable or pd.DataFrame
        Frequency table, or a DataFrame with "token" and "count" columns.
    top_k : int
        Number of tokens to show.
    horizontal : bool
        Horizontal bars (most frequent on top) if True.
    figsize : Tuple[float, float]
        Figure size in inches.
    title : Optional[str]
        Plot title. If None, a default is constructed.
    out_path : Optional[str]
        If provided, save the figure to this path (e.g., PNG).
    show : bool
        If True, call plt.show(). If False, just return the figure/axes.

    Returns
    -------
    (fig, ax)
        Matplotlib Figure and Axes objects.
    """
    if isinstance(table, FrequencyTable):
        df = table.to_frame(top_k)
    else:
        missing = {"token", "count"} - set(table.columns)
        if missing:
            raise ValueError(f"DataFrame is missing column(s): {sorted(missing)}")
        df = table.sort_values("count", ascending=False, kind="stable").head(top_k)

    if df.empty:
        raise ValueError("Frequency table is empty; nothing to plot.")

    tokens = df["token"].astype(str).tolist()
    counts = pd.to_numeric(df["count"], errors="coerce").to_numpy()

    fig, ax = plt.subplots(figsize=figsize)
    positions = np.arange(len(tokens))

    if horizontal:
        ax.barh(positions, counts)
        ax.set_yticks(positions)
        ax.set_yticklabels(tokens)
        ax.invert_yaxis()
        ax.set_xlabel("Count")
    else:
        ax.bar(positions, counts)
        ax.set_xticks(positions)
        ax.set_xticklabels(tokens, rotation=45, ha="right")
        ax.set_ylabel("Count")

    ax.set_title(title or f"Top {len(tokens)} tokens")

    _finish(fig, out_path, show)
    return fig, ax


def plot_tokens_per_document(
    tokens_frame: pd.DataFrame,
    documents: Optional[pd.DataFrame] = None,
    bins: int = 30,
    figsize: Tuple[float, float] = (8.0, 5.0),
    title: Optional[str] = None,
    out_path: Optional[str] = None,
    show: bool = True,
):
    """
    Histogram of the number of surviving tokens per document.

    If ``documents`` is given, documents that lost every token count as 0.
    """
    counts = tokens_frame.groupby("doc_id", sort=False, dropna=False).size()
    if documents is not None:
        counts = counts.reindex(documents["doc_id"].unique(), fill_value=0)

    if counts.empty:
        raise ValueError("No documents to plot.")

    fig, ax = plt.subplots(figsize=figsize)
    ax.hist(counts.to_numpy(), bins=bins)
    ax.set_xlabel("Tokens per document")
    ax.set_ylabel("Documents")
    ax.set_title(title or "Tokens per document after cleaning")

    mean = float(counts.mean())
    ax.axvline(mean, color="black", linestyle="--", linewidth=1)
    ax.text(mean, ax.get_ylim()[1] * 0.95, f" mean={mean:.1f}", va="top", fontsize=9)

    _finish(fig, out_path, show)
    return fig, ax


def plot_documents_over_time(
    documents: pd.DataFrame,
    freq: str = "D",
    figsize: Tuple[float, float] = (10.0, 5.0),
    title: Optional[str] = None,
    out_path: Optional[str] = None,
    show: bool = True,
):
    """
    Line chart of the number of documents per period.

    Parameters
    ----------
    documents : pd.DataFrame
        Frame with a "timestamp" column (see ``load_tweet_dataset``).
    freq : str
        pandas offset alias for the period, e.g. "D" or "H".
    """
    if "timestamp" not in documents.columns:
        raise ValueError("documents has no 'timestamp' column.")

    stamps = documents["timestamp"].dropna()
    if stamps.empty:
        raise ValueError("No timestamps to plot.")

    volume = stamps.dt.to_period(freq).value_counts().sort_index()

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(volume.index.to_timestamp(), volume.to_numpy(), marker="o")
    ax.set_xlabel("Period")
    ax.set_ylabel("Documents")
    ax.set_title(title or f"Documents per period ({freq})")
    fig.autofmt_xdate()

    _finish(fig, out_path, show)
    return fig, ax
