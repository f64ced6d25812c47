"""
Dataset loading utilities for tweet corpora.

This module is responsible for:
- reading the data configuration from config/data.yaml
- loading the raw delimited file (local path or URL) into a pandas DataFrame
- normalizing the text, id and timestamp columns to standard names
  ("doc_id", "text", "timestamp")
- applying basic cleaning (drop NA, drop duplicates) as configured

The resulting DataFrame is what the cleaning pipeline consumes: one row
per document, with a stable identifier that every token keeps.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Union

import pandas as pd
import yaml


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"

logger = logging.getLogger(__name__)


class Document(NamedTuple):
    """One unit of source text (e.g., one tweet) and its identifier."""

    doc_id: Any
    text: Any


def _load_yaml(path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file and return it as a dictionary.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Config file is empty or invalid: {path}")

    return cfg


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the full data configuration dictionary.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing the "dataset" and "preprocessing" sections.
    """
    cfg = _load_yaml(config_path)

    for section in ("dataset", "preprocessing"):
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in data config: {config_path}')

    return cfg


def _is_url(path: str) -> bool:
    return "://" in path


def load_tweet_dataset(
    config: Union[str, Dict[str, Any]] = DEFAULT_DATA_CONFIG_PATH,
) -> pd.DataFrame:
    """
    Load the tweet dataset according to the configuration.

    This function:
    - reads the delimited file (or URL) specified under "dataset"
    - ensures the text column (and the optional id/timestamp columns) exist
    - optionally drops NA text rows and duplicate texts
    - normalizes columns to "doc_id", "text" and, if configured, "timestamp"

    Parameters
    ----------
    config : str or dict
        Path to the data YAML configuration, or an already-loaded config
        (either the full config or just its "dataset" section).

    Returns
    -------
    pd.DataFrame
        DataFrame with columns ["doc_id", "text"] (+ "timestamp"), followed
        by any other source columns.

    Raises
    ------
    FileNotFoundError
        If a local dataset file cannot be found.
    ValueError
        If required columns are missing.
    """
    if isinstance(config, str):
        cfg = load_data_config(config)
    else:
        cfg = config
    dataset_cfg = cfg.get("dataset", cfg) or {}

    path = dataset_cfg.get("path", "data/raw/tweets.csv")
    text_column = dataset_cfg.get("text_column", "text")
    id_column = dataset_cfg.get("id_column")
    timestamp_column = dataset_cfg.get("timestamp_column")
    column_names = dataset_cfg.get("column_names")
    drop_duplicates = bool(dataset_cfg.get("drop_duplicates", False))
    drop_na_text = bool(dataset_cfg.get("drop_na_text", False))
    limit = dataset_cfg.get("limit")

    if not _is_url(path) and not os.path.exists(path):
        raise FileNotFoundError(f"Dataset file not found at: {path}")

    read_kwargs: Dict[str, Any] = {
        "sep": dataset_cfg.get("sep", ","),
        "encoding": dataset_cfg.get("encoding", "utf-8"),
    }
    if column_names:
        # Header-less dumps such as the Sentiment140 CSV.
        read_kwargs["header"] = None
        read_kwargs["names"] = list(column_names)
    if limit:
        read_kwargs["nrows"] = int(limit)

    logger.info("Loading dataset from %s", path)
    df = pd.read_csv(path, **read_kwargs)

    required = [text_column] + [c for c in (id_column, timestamp_column) if c]
    missing_cols = [col for col in required if col not in df.columns]
    if missing_cols:
        raise ValueError(
            f"Missing required column(s) in dataset: {missing_cols}. "
            f"Available columns: {list(df.columns)}"
        )

    if drop_na_text:
        df = df.dropna(subset=[text_column])

    if drop_duplicates:
        df = df.drop_duplicates(subset=[text_column], keep="first")

    df = df.reset_index(drop=True)

    out = pd.DataFrame(index=df.index)
    if timestamp_column:
        out["timestamp"] = pd.to_datetime(df[timestamp_column], errors="coerce")

    # Timestamps are not unique per tweet, so they never stand in for an id.
    if id_column:
        out["doc_id"] = df[id_column]
    else:
        out["doc_id"] = df.index

    out["text"] = df[text_column]

    rest = [c for c in df.columns if c not in required and c not in out.columns]
    out = pd.concat([out, df[rest]], axis=1)

    ordered = ["doc_id", "text"] + (["timestamp"] if timestamp_column else [])
    out = out[ordered + [c for c in out.columns if c not in ordered]]

    logger.info("Loaded %d documents.", len(out))
    return out


def documents_from_texts(
    texts: Iterable[Any],
    ids: Optional[Sequence[Any]] = None,
) -> pd.DataFrame:
    """
    Build a documents DataFrame from in-memory strings.

    Parameters
    ----------
    texts : Iterable[Any]
        Raw texts, one per document.
    ids : Optional[Sequence[Any]]
        Document identifiers; defaults to 0..n-1.

    Returns
    -------
    pd.DataFrame
        DataFrame with columns ["doc_id", "text"].
    """
    texts = list(texts)
    if ids is None:
        ids = list(range(len(texts)))
    if len(ids) != len(texts):
        raise ValueError(f"Got {len(ids)} ids for {len(texts)} texts.")
    return pd.DataFrame({"doc_id": list(ids), "text": texts})


def iter_documents(df: pd.DataFrame) -> List[Document]:
    """
    Return the rows of a documents DataFrame as Document tuples.
    """
    if "text" not in df.columns:
        raise ValueError(f"Expected a 'text' column, got: {list(df.columns)}")
    ids = df["doc_id"] if "doc_id" in df.columns else pd.Series(df.index, index=df.index)
    return [Document(doc_id, text) for doc_id, text in zip(ids, df["text"])]
