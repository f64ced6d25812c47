"""
Clean a tweet dataset and report its most frequent tokens.

This script:

- loads the dataset configured in config/data.yaml
- builds the cleaning pipeline from the "preprocessing" section
- writes the token table, global and per-document frequencies as CSV
- draws the top-token, tokens-per-document and volume-over-time charts

Usage (from project root):

    python -m scripts.run_tweet_analysis
    # or
    python scripts/run_tweet_analysis.py --top-k 30
"""

from __future__ import annotations

import argparse
import os

from textclean.data.datasets import load_data_config, load_tweet_dataset
from textclean.evaluation.frequency import (
    FrequencyTable,
    document_frequencies,
    save_frequency_table,
    top_tokens_by_period,
)
from textclean.evaluation.plots import (
    plot_documents_over_time,
    plot_tokens_per_document,
    plot_top_tokens,
)
from textclean.features.pipeline import build_pipeline
from textclean.utils.run_utils import ensure_dir_exists, get_logger, get_section, load_run_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Clean a tweet dataset and report token frequencies."
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--run-config",
        type=str,
        default="config/run.yaml",
        help="Path to run config YAML (default: config/run.yaml).",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Number of tokens to report (default: reporting.top_k).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    run_cfg = load_run_config(args.run_config)
    logger = get_logger(name="run_tweet_analysis", config=run_cfg, log_file_suffix="analysis")

    paths_cfg = get_section(run_cfg, "paths")
    reporting_cfg = get_section(run_cfg, "reporting")
    results_dir = paths_cfg.get("results_dir", "outputs/results")
    figures_dir = paths_cfg.get("figures_dir", "outputs/figures")
    ensure_dir_exists(results_dir)
    ensure_dir_exists(figures_dir)

    top_k = args.top_k or int(reporting_cfg.get("top_k", 20))
    period = reporting_cfg.get("period", "D")
    show = bool(reporting_cfg.get("show_plots", False))

    logger.info("=" * 80)
    logger.info("Configs: data=%s, run=%s", args.data_config, args.run_config)

    # Build first so a bad option fails before the dataset is read.
    data_cfg = load_data_config(args.data_config)
    pipeline = build_pipeline(data_cfg["preprocessing"])
    logger.info("Pipeline: %s", pipeline.describe())

    documents = load_tweet_dataset(data_cfg)
    tokens = pipeline.process_documents(documents)

    tokens_path = os.path.join(results_dir, "tokens.csv")
    tokens.to_csv(tokens_path, index=False)
    logger.info("Saved %d tokens to %s", len(tokens), tokens_path)

    table = FrequencyTable.from_tokens(tokens)
    save_frequency_table(table, os.path.join(results_dir, "token_frequencies.csv"))
    save_frequency_table(
        document_frequencies(tokens), os.path.join(results_dir, "document_frequencies.csv")
    )
    logger.info(
        "Top %d of %d distinct tokens:\n%s",
        top_k,
        len(table),
        table.to_frame(top_k).to_string(index=False),
    )

    if table.total:
        plot_top_tokens(
            table,
            top_k=top_k,
            out_path=os.path.join(figures_dir, "top_tokens.png"),
            show=show,
        )
    else:
        logger.warning("No tokens survived cleaning; skipping the top-token chart.")

    if len(documents):
        plot_tokens_per_document(
            tokens,
            documents,
            out_path=os.path.join(figures_dir, "tokens_per_document.png"),
            show=show,
        )

    if "timestamp" in documents.columns and documents["timestamp"].notna().any():
        by_period = top_tokens_by_period(tokens, documents, freq=period, k=10)
        save_frequency_table(by_period, os.path.join(results_dir, "top_tokens_by_period.csv"))
        plot_documents_over_time(
            documents,
            freq=period,
            out_path=os.path.join(figures_dir, "documents_over_time.png"),
            show=show,
        )
    else:
        logger.info("No timestamps in the dataset; skipping time-based reports.")

    logger.info("Tweet analysis completed.")


if __name__ == "__main__":
    main()
