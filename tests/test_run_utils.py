"""
Tests for run configuration and logging helpers.
"""

from __future__ import annotations

import logging
import os

import pytest

from textclean.utils.run_utils import (
    PipelineConfigError,
    ensure_dir_exists,
    get_logger,
    get_section,
    load_run_config,
)


RUN_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "config", "run.yaml")


def test_load_run_config_has_paths_and_logging():
    cfg = load_run_config(RUN_CONFIG_PATH)
    assert "results_dir" in cfg["paths"]
    assert "level" in cfg["logging"]
    assert "top_k" in cfg["reporting"]


def test_load_run_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_run_config(os.path.join(str(tmp_path), "run.yaml"))


def test_get_section():
    assert get_section({"a": {"x": 1}}, "a") == {"x": 1}
    assert get_section({"a": None}, "a") == {}
    assert get_section(None, "a") == {}
    with pytest.raises(PipelineConfigError):
        get_section({"a": [1, 2]}, "a")


def test_ensure_dir_exists(tmp_path):
    target = os.path.join(str(tmp_path), "a", "b")
    ensure_dir_exists(target)
    assert os.path.isdir(target)


def test_get_logger_writes_log_file(tmp_path):
    cfg = {
        "logging": {"level": "DEBUG", "to_file": True, "file_prefix": "unit"},
        "paths": {"logs_dir": str(tmp_path)},
    }
    logger = get_logger("textclean_test_logger", cfg, log_file_suffix="x")
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    log_path = tmp_path / "unit_x.log"
    assert log_path.exists()
    assert "hello" in log_path.read_text(encoding="utf-8")

    # A second call returns the configured logger unchanged.
    assert get_logger("textclean_test_logger", cfg) is logger
    assert len(logger.handlers) == 2
