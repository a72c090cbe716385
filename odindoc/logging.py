"""Diagnostics logging for odindoc.

Reports go to stdout; every log record goes to stderr (and optionally a
file) so that piping ``odindoc core:fmt > fmt.txt`` never mixes the two.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "odindoc"
_CONSOLE_FORMAT = "[odindoc] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the odindoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def close_logging() -> None:
    """Detach and close every handler owned by the odindoc logger."""
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route odindoc diagnostics to stderr, plus ``log_file`` when given.

    Only warnings surface by default; ``verbose`` enables the scanner and
    discovery debug records. Calling this again replaces (and closes) the
    handlers from the previous call.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    close_logging()

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        # The file always gets debug detail, whatever the console shows.
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["close_logging", "configure_logging", "get_logger"]
