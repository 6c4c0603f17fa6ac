# src/agent/logging_config.py
"""
Central logging configuration.

Call configure_logging() once from an entrypoint, for example:

    from agent.logging_config import configure_logging
    configure_logging(config.logging.level_number)

After that, planner and resolver logs (planning.*, world.*, agent.*) are
visible on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging if no handlers are attached yet.

    Args:
        level: logging level as int (logging.DEBUG) or name ("DEBUG")
    """
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
