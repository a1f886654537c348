from __future__ import annotations

import logging
import sys

from tradebook.config.settings import Settings


def configure_logging(level: str | None = None, force: bool = False) -> None:
    """
    Configure the root logger with console output.

    Non-destructive by default: if the root logger already has handlers
    (the host application configured logging), nothing is changed.
    Level falls back to Settings().log_level.
    """
    root_logger = logging.getLogger()

    if root_logger.hasHandlers() and not force:
        return

    root_logger.setLevel((level or Settings().log_level).upper())

    if force:
        root_logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
