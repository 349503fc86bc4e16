"""Logging setup for the ``admiral`` command.

Library modules only create ``logging.getLogger(__name__)`` loggers;
this module attaches a handler to the package logger once per process.
Records go to stderr through Rich when it is installed, otherwise
through a plain stream handler.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "admiral_cli"

PLAIN_FORMAT = "[%(asctime)s: %(levelname)s] %(message)s"
DEBUG_FORMAT = "[%(asctime)s: %(levelname)s] [%(module)s: %(lineno)d] %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def _build_handler(level: int) -> logging.Handler:
    try:
        from rich.logging import RichHandler

        from admiral_cli.cli.console import get_rich_console

        handler: logging.Handler = RichHandler(
            console=get_rich_console(),
            show_path=level <= logging.DEBUG,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    except ImportError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(DEBUG_FORMAT if level <= logging.DEBUG else PLAIN_FORMAT)
        )
    return handler


def setup_logging(verbosity: int = 0) -> logging.Logger:
    """Configure the package logger for *verbosity* and return it.

    Calling it again replaces the previously installed handler.
    """
    level = level_for_verbosity(verbosity)
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler(level))
    logger.setLevel(level)
    logger.propagate = False
    return logger
