"""Logging setup for AudioShelf.

Configures the ``audioshelf`` package logger that every module logger
propagates to. Debug output is enabled by the AUDIOSHELF_DEBUG environment
variable; the CLI enables INFO output with ``--verbose``.
"""

import logging
import os
from typing import Optional

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    return os.getenv("AUDIOSHELF_DEBUG", "0") == "1"


def setup_logger(level: Optional[int] = None) -> logging.Logger:
    """Configure and return the ``audioshelf`` package logger.

    Module loggers (``logging.getLogger(__name__)``) propagate to it.
    """
    global _logger
    if _logger is not None:
        if level is not None:
            _logger.setLevel(level)
        return _logger
    logger = logging.getLogger("audioshelf")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    if level is None:
        level = logging.DEBUG if debug_enabled() else logging.WARNING
    logger.setLevel(level)
    _logger = logger
    return logger

