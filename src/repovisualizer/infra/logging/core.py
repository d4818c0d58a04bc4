from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the logging subsystem. Records are
routed through a QueueHandler/QueueListener pair so that file writes never
block the caller thread.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from repovisualizer.infra.fs import get_user_data_dir
from repovisualizer.infra.logging.config import LoggingConfig
from repovisualizer.infra.logging.handlers import (
    build_console_handler,
    build_file_handler,
    is_our_handler,
    tag_handler,
)

# Internal state flags for idempotency and lifecycle tracking
CONFIGURED_FLAG_ATTR: str = "_repovisualizer_configured"
QUEUE_LISTENER_ATTR: str = "_repovisualizer_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "repovisualizer.log") -> str:
    """Resolve the standard log path within the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the console and file handlers behind a queue on the root logger.

    A second call is a no-op unless force is set, in which case the
    previous handlers are detached first.

    Args:
        cfg: Handler setup for this process.
        force: Re-wire even when logging is already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    root.setLevel(cfg.level_value)

    shutdown_logging()

    handlers_list: List[logging.Handler] = []
    if cfg.console:
        handlers_list.append(build_console_handler(cfg))
    fh = build_file_handler(cfg)
    if fh is not None:
        handlers_list.append(fh)

    if not handlers_list:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

    queue_handler = QueueHandler(log_queue)
    tag_handler(queue_handler)

    listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
    listener.start()

    root.addHandler(queue_handler)

    setattr(root, QUEUE_LISTENER_ATTR, listener)
    setattr(root, CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter shutdown
    atexit.register(_stop_listener, listener)

    return root


def shutdown_logging() -> None:
    """Detach our handlers from the root logger and stop the listener."""
    root = logging.getLogger()

    listener = getattr(root, QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _stop_listener(listener)
        for h in listener.handlers:
            h.close()
        setattr(root, QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if is_our_handler(h):
            root.removeHandler(h)
            h.close()

    if hasattr(root, CONFIGURED_FLAG_ATTR):
        delattr(root, CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """Named logger; records propagate to the queue on the root logger."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a QueueListener, tolerating listeners that were already stopped."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
