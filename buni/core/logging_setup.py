from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds")
        line = f"{ts} level={record.levelname} logger={record.name} msg={record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class BuniStreamHandler(logging.StreamHandler):
    """stdout handler installed by setup_logging."""


def setup_logging(level: str = "INFO", logger_name: str = "buni") -> None:
    """Configure the package logger, leaving the root logger alone.

    When the host (a WSGI server, pytest) already has root handlers the
    records propagate to them; otherwise a single stdout handler is added.
    """
    lvl = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(lvl)

    # repeated app factories replace their own handler, never anyone else's
    for handler in list(logger.handlers):
        if isinstance(handler, BuniStreamHandler):
            logger.removeHandler(handler)

    if logging.getLogger().handlers:
        return

    handler = BuniStreamHandler(sys.stdout)
    handler.setLevel(lvl)
    handler.setFormatter(KeyValueFormatter())
    logger.addHandler(handler)
