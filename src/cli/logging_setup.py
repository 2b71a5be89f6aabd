"""Console logging for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "order_desk"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr `RichHandler` to the ``order_desk`` logger once."""

    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
        logger.propagate = False
    logger.setLevel(level.upper())
    return logger
