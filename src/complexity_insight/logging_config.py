"""
Logging configuration for Complexity Insight.

Every module logs through ``get_logger(__name__)``; nothing is configured on
import. Applications that want the engine's debug trail on the terminal
call ``setup_logging`` once. Module paths and metric values are logged
verbatim, so rich markup is off.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# "complexity_insight", taken from this module's own dotted name
PACKAGE_LOGGER = __name__.partition(".")[0]

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Route engine logs to a rich stderr console, and optionally a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        verbose: Enable DEBUG level logging (per-module traversal, fan-out, closure)
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append plain-text logs to
        console: Rich console to render to; defaults to a new stderr console

    Returns:
        The package logger
    """
    level = _level(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console or Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the package namespace.

    Args:
        name: Usually ``__name__``; a bare suffix such as ``"graph"`` is
              namespaced under the package. None returns the package logger.
    """
    if name is None or name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)

    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)
