"""
Logging setup for the CLI.

Library modules log through `logging.getLogger(__name__)` and never install
handlers; `setup_logging` routes the "flagwatch" namespace to a Rich handler
on stderr so stdout carries only the report.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "flagwatch"


def setup_logging(verbose: bool = False, console: Console = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
