"""Logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "branch_sweeper"

err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send package logs to stderr through rich.

    Verbose mode shows diagnostic lines; otherwise only warnings and errors.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
