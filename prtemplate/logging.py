"""Logging helpers for prtemplate.

Library modules only emit debug records; the CLI turns them on with
``--verbose``.
"""

import logging
from typing import Optional

_LOGGER_NAME = "prtemplate"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-scoped logger under the prtemplate hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the prtemplate logger with a single stderr handler.

    Args:
        verbose: Emit debug records when True, warnings and above otherwise.

    Returns:
        The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[prtemplate] %(levelname)s %(message)s"))
    logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
