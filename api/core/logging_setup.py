"""
Process-wide logging configuration.
"""

from __future__ import annotations

import logging
import os
import sys


def log_level() -> int:
    name = os.environ.get("TODO_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    level = logging.getLevelName(name)
    # getLevelName returns a "Level X" string for unknown names.
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: int | None = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Safe to call more than once: existing handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(level if level is not None else log_level())

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    # Uvicorn access logs are noisy at INFO for a polling client.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
