"""
Logging for funcsift.

Records go to stderr through rich so that ``funcsift extract --format json``
can write clean JSON to stdout. Library modules only ever call get_logger();
handlers are installed by the CLI via setup_logging().
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "funcsift"

# Keys match ExtractionConfig.verbosity
VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def verbosity_from_flags(verbose: bool = False, quiet: bool = False) -> str:
    """--quiet beats --verbose."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Install the rich stderr handler (and optionally a plain file handler).

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings, e.g. unbalanced
            braces) or "verbose" (every rejected header, with source paths)
        log_file: Also append plain-text records to this file

    Returns:
        The ``funcsift`` logger
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.WARNING)
    verbose = level <= logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,  # messages carry raw source text
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        to_file = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        to_file.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(to_file)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger under the ``funcsift`` namespace.

    ``get_logger(__name__)`` inside the package is used as-is; other names are
    prefixed so their records still reach funcsift's handlers.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
