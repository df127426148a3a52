"""Minimal logging utilities for refmark.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from refmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Preprocessing readme.md")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "refmark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("preprocess")
        >>> logger.name
        'refmark.preprocess'
    """
    if not (name == "refmark" or name.startswith("refmark.")):
        name = f"refmark.{name}"
    return logging.getLogger(name)
