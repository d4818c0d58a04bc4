from __future__ import annotations

"""
Logging Configuration Models.

Describes how the logging subsystem should be wired for a run: severity,
console output and the optional rotating log file.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted level names, case-insensitive
LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable logging setup for one process.

    Attributes:
        level: Minimum severity name. Unknown names resolve to INFO.
        console: Emit records on stderr.
        log_file: Path of the rotating log file, None to disable it.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Format of stderr records.
        file_fmt: Format of log file records.
        datefmt: Timestamp format of log file records.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_value(self) -> int:
        """Numeric logging level for the configured name."""
        if not self.level:
            return logging.INFO
        return LEVEL_MAP.get(str(self.level).strip().upper(), logging.INFO)

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Console logging at INFO, or DEBUG when requested, plus an optional file."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)
