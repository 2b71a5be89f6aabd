"""Persistent error journal.

Every failure the CLI reports is appended to a text file first, as
``[timestamp] Error: <message>`` followed by the traceback. Writing goes
through a stdlib `logging.FileHandler` attached to a private logger.

Rules:
- The journal logger is built directly, not through `logging.getLogger`, so
  it never enters the logging registry and two journals never share a handler.
- A log file that can't be opened (the handler raises `OSError` from its lazy
  open) or written (the handler calls `handleError`) becomes a warning on the
  ``order_desk.error_log`` logger; `record` never raises into the caller.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_FORMAT = "[%(asctime)s] Error: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("order_desk.error_log")


class _JournalHandler(logging.FileHandler):
    def handleError(self, record: logging.LogRecord) -> None:
        logger.warning("Could not write error log %s: %s", self.baseFilename, sys.exc_info()[1])


class ErrorLog:
    """Best-effort appender for exceptions raised by core operations."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._logger = logging.Logger("order_desk.error_log.journal", level=logging.ERROR)
        self._logger.propagate = False
        self._handler: logging.FileHandler | None = None

    def _ensure_handler(self) -> None:
        if self._handler is not None:
            return
        handler = _JournalHandler(self.path, mode="a", encoding="utf-8", delay=True)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        self._logger.addHandler(handler)
        self._handler = handler

    def record(self, exc: BaseException) -> None:
        """Append `exc` and its traceback to the log file."""

        self._ensure_handler()
        try:
            self._logger.error(str(exc) or type(exc).__name__, exc_info=(type(exc), exc, exc.__traceback__))
            self._handler.flush()
        except OSError as log_exc:
            logger.warning("Could not write error log %s: %s", self.path, log_exc)

    def close(self) -> None:
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
