"""Shared utilities for sheetcut."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from sheetcut.config import get_settings

# Rich console for pretty output
console = Console()


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Set up logging with Rich handler (default level from settings)."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    logger = logging.getLogger("sheetcut")
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module."""
    return logging.getLogger(f"sheetcut.{name}")


def format_inches(value: float) -> str:
    """Format a length in inches the way warnings print it."""
    return f'{value:.2f}"'


def format_size(width: float, length: float) -> str:
    """Format a width x length pair, e.g. 60.00"×110.00"."""
    return f"{format_inches(width)}×{format_inches(length)}"
