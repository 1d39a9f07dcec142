"""
Logging configuration for depscope.

Rendered diagrams, matrices and listings are written to stdout, often into a
pipe or a file. Log records therefore always go to stderr through a rich
handler.
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = __name__.split(".")[0]

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    # quiet wins when both flags are given
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route log records to stderr (and optionally a file).

    Args:
        verbose: Enable DEBUG level logging, file paths and traceback locals
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append plain-text records to

    Returns:
        The depscope package logger
    """
    level = _level(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            tracebacks_suppress=[typer],
            # Entity names such as "list[Priced]" are not rich markup
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    # Each CLI invocation reconfigures; tests call this repeatedly
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the depscope namespace.

    Args:
        name: Module name, usually ``__name__`` (e.g. 'depscope.dispatcher');
              bare names are prefixed. None returns the package logger.
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    if name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
