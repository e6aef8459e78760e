"""Logging for assetpress runs.

Every component logs under the ``assetpress`` hierarchy so build hosts can
silence or redirect per-file progress lines (minified, copied, merged)
without touching their own loggers.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "assetpress"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``assetpress.<name>``, e.g. ``get_logger("walker")``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route progress lines to stderr, plus ``log_file`` when a build wants a record.

    ``verbose`` also surfaces files queued for merging and full tracebacks for
    skipped files.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Hosts may call the CLI entrypoint several times per build.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[assetpress] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_exception(logger: logging.Logger, message: str, exc: BaseException) -> None:
    """Report a skipped file or input; tracebacks only in verbose runs."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.exception("%s: %s", message, exc)
    else:
        logger.error("%s: %s", message, exc)


__all__ = ["configure_logging", "get_logger", "log_exception"]
