from __future__ import annotations

"""
Logging Core Orchestrator.

Configures the root logger once per process. Records are pushed through a
QueueHandler and fanned out by a QueueListener to the console and the
optional rotating log file, so slow file I/O never stalls indexing.
Every handler installed here is tagged, which lets a reconfiguration
remove exactly those and leave handlers of test harnesses alone.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from codeatlas.infra.fs import get_user_data_dir
from codeatlas.infra.logging.config import _LEVEL_MAP, LoggingConfig

_CONFIGURED_FLAG_ATTR: str = "_codeatlas_configured"
_QUEUE_LISTENER_ATTR: str = "_codeatlas_queue_listener"
_HANDLER_TAG_ATTR: str = "_codeatlas_handler"

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation: 2 MiB per file, three backups
_MAX_BYTES = 2 * 1024 * 1024
_BACKUP_COUNT = 3


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "codeatlas.log") -> str:
    """Standard log file location inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger idempotently.

    Args:
        cfg: Logging settings.
        force: Re-create handlers even if logging was already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    sinks: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        sinks.append(sh)

    if cfg.log_file:
        fh = _open_log_file(cfg.log_file, level_int)
        if fh:
            sinks.append(fh)

    if not sinks:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    setattr(queue_handler, _HANDLER_TAG_ATTR, True)

    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()

    root.addHandler(queue_handler)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    # Flush queued records on interpreter shutdown
    atexit.register(_safe_stop_listener, listener)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _open_log_file(log_file: str, level_int: int) -> Optional[RotatingFileHandler]:
    """Open the rotating log file, or report on stderr and return None."""
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return fh


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a QueueListener; a second stop (atexit after a reset) is a no-op."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
        # Sinks live only inside the listener; close them so log files are released
        for h in listener.handlers:
            h.close()
