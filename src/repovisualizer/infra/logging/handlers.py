from __future__ import annotations

"""
Logging Handler Factories.

Every handler built here is tagged, so shutdown only detaches what this
package installed and leaves pytest or library handlers alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from repovisualizer.infra.logging.config import LoggingConfig

HANDLER_TAG_ATTR: str = "_repovisualizer_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, HANDLER_TAG_ATTR, True)
    return handler


def is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, HANDLER_TAG_ATTR, False))


def build_console_handler(cfg: LoggingConfig) -> logging.Handler:
    """Stderr handler using the console format."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(cfg.level_value)
    sh.setFormatter(logging.Formatter(cfg.console_fmt))
    return tag_handler(sh)


def build_file_handler(cfg: LoggingConfig) -> Optional[logging.Handler]:
    """
    Rotating file handler for cfg.log_file.

    Returns:
        Optional[logging.Handler]: None when no file is configured or it
            cannot be opened. A missing log file never aborts a run.
    """
    if not cfg.log_file:
        return None

    try:
        os.makedirs(os.path.dirname(os.path.abspath(cfg.log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            cfg.log_file,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Log file unavailable at '{cfg.log_file}': {e}\n")
        return None

    fh.setLevel(cfg.level_value)
    fh.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return tag_handler(fh)
