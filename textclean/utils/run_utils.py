"""
Run-level helpers shared by the pipeline and the scripts.

This module centralizes common functionality used across the project:

- loading the run configuration (config/run.yaml)
- ensuring directories exist before writing files
- constructing loggers that respect the logging settings
- the configuration error raised while building a pipeline

Scripts under scripts/ and the reporting helpers rely on these utilities.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml


DEFAULT_RUN_CONFIG_PATH = "config/run.yaml"


class PipelineConfigError(ValueError):
    """
    Raised when a pipeline option is unknown or invalid.

    Every stage validates its configuration while it is being built, so
    this error surfaces before any document is processed.
    """


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def load_run_config(
    config_path: str = DEFAULT_RUN_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Load and return the run configuration dictionary.

    Parameters
    ----------
    config_path : str
        Path to the run YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Parsed configuration with sections such as "paths", "logging"
        and "reporting".

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Run config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Run config file is empty or invalid: {config_path}")

    # Permissive: callers read only the keys they need.
    return cfg


def get_section(cfg: Optional[Dict[str, Any]], name: str) -> Dict[str, Any]:
    """
    Return a config section as a dict, treating a missing or null section
    as empty.
    """
    if not cfg:
        return {}
    section = cfg.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise PipelineConfigError(
            f'Config section "{name}" must be a mapping, got {type(section).__name__}.'
        )
    return section


# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------


def ensure_dir_exists(path: str) -> None:
    """
    Ensure that a directory exists (create it if necessary).

    Parameters
    ----------
    path : str
        Directory path.
    """
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------


_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _parse_log_level(level_str: str) -> int:
    """
    Convert a string log level into a logging module constant.

    Parameters
    ----------
    level_str : str
        One of: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL" (case-insensitive).

    Returns
    -------
    int
        Corresponding logging level.
    """
    level_str = (level_str or "INFO").upper()
    return {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }.get(level_str, logging.INFO)


def get_logger(
    name: str,
    config: Dict[str, Any],
    log_file_suffix: Optional[str] = None,
) -> logging.Logger:
    """
    Construct and return a logger that respects the logging section of
    the run config.

    Library modules under textclean log through ``logging.getLogger(__name__)``;
    their records reach the handlers configured here because the handlers
    are also attached to the "textclean" package logger.

    Parameters
    ----------
    name : str
        Logger name.
    config : Dict[str, Any]
        Run configuration.
    log_file_suffix : Optional[str]
        Optional suffix appended to the log file name (e.g., "walkthrough").

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # If the logger already has handlers, assume it's already configured.
    if logger.handlers:
        return logger

    logging_cfg = config.get("logging", {}) or {}
    paths_cfg = config.get("paths", {}) or {}

    level = _parse_log_level(logging_cfg.get("level", "INFO"))
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATEFMT)

    handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if bool(logging_cfg.get("to_file", True)):
        logs_dir = paths_cfg.get("logs_dir", "outputs/logs")
        ensure_dir_exists(logs_dir)

        file_prefix = logging_cfg.get("file_prefix", "textclean")
        if log_file_suffix:
            filename = f"{file_prefix}_{log_file_suffix}.log"
        else:
            filename = f"{file_prefix}.log"

        file_handler = logging.FileHandler(
            os.path.join(logs_dir, filename), encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    package_logger = logging.getLogger("textclean")
    for target in (logger, package_logger):
        if target is package_logger and target.handlers:
            continue
        target.setLevel(level)
        for handler in handlers:
            target.addHandler(handler)
        target.propagate = False

    return logger
