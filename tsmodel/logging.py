"""Logger setup shared by the tsmodel CLI and the extraction pipeline.

Every pipeline component logs through ``get_logger("<component>")``. Console
lines name the component (``[tsmodel:parser] WARNING ...``) so a skipped
declaration can be traced back to the stage that dropped it. A log file,
when requested, always records DEBUG detail whatever the console level is.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "tsmodel"
CONSOLE_FORMAT = "[%(component)s] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(component)s: %(message)s"


class ComponentFilter(logging.Filter):
    """Set ``record.component`` to ``tsmodel:<component>`` for formatters."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = f"{ROOT_LOGGER}."
        if record.name.startswith(prefix):
            record.component = f"{ROOT_LOGGER}:{record.name[len(prefix):]}"
        else:
            record.component = record.name
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for a pipeline component.

    Accepts a bare component (``"parser"``) or a module path that already
    sits under the package (``"tsmodel.parser"``).
    """
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """``--verbose`` wins over ``--quiet``; neither means INFO."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.addFilter(ComponentFilter())
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (stderr) and optional file handlers on the package logger.

    Calling it again replaces the handlers from the previous call.
    """
    level = console_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(), level, CONSOLE_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG, FILE_FORMAT)
    return logger


__all__ = ["ComponentFilter", "configure_logging", "console_level", "get_logger"]
