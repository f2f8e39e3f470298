from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, TextIO

LOGGER_NAME = "go_include"
DIAGNOSTIC_FORMAT = "include: %(message)s"


@contextmanager
def stderr_diagnostics(stream: TextIO, level: str = "WARNING") -> Iterator[logging.Logger]:
    """Route go_include.* log records to `stream` for the duration of a run."""
    logger = logging.getLogger(LOGGER_NAME)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(DIAGNOSTIC_FORMAT))

    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(level)
    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
        handler.flush()
