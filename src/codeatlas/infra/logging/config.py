from __future__ import annotations

"""
Logging Settings.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
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
    What the CLI controls about logging.

    Attributes:
        level: Minimum severity level to capture.
        console: Enable stderr output.
        log_file: Optional path for a rotating log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
