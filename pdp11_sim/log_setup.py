"""
Logging setup for the pdp11sim front end.

Console output goes through rich's RichHandler on stderr so it never
mixes with the trace and statistics on stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    name: str = "pdp11_sim",
    console_level: int = logging.WARNING,
) -> logging.Logger:
    """Configure and return the package logger.

    Calling it twice returns the already configured logger.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    ch = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    ch.setLevel(console_level)
    logger.addHandler(ch)

    return logger
