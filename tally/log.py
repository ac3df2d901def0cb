"""Logging setup for the tally command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Send tally's log records to stderr through Rich.

    Args:
        level: Log level name from the config file.
        verbose: Force DEBUG regardless of level.

    Raises:
        ValueError: If level is not a known log level name.
    """
    level_name = str(level).upper()
    if level_name not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log_level: {level!r}")

    logger = logging.getLogger("tally")
    logger.setLevel(logging.DEBUG if verbose else level_name)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
