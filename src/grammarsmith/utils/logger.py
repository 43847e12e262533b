"""Minimal logging utilities for Grammarsmith.

Provides a simple get_logger function that wraps the standard library logging.
The library only logs at DEBUG level and installs no handlers; applications
configure output through the ``grammarsmith`` logger.

Example:
    >>> from grammarsmith.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("scanning input")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "grammarsmith." prefix.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("mymodule").name
        'grammarsmith.mymodule'
    """
    if not (name == "grammarsmith" or name.startswith("grammarsmith.")):
        name = f"grammarsmith.{name}"
    return logging.getLogger(name)
