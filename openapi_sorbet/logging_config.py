"""Logging setup shared by all openapi_sorbet modules.

Modules obtain a logger with ``get_logger(__name__)``; the CLI calls
``configure_logging`` once so diagnostics land on stderr, away from any
generated output.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = "openapi_sorbet"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger inside the openapi_sorbet hierarchy."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    Args:
        verbose: Emit DEBUG records instead of INFO and above.

    Returns:
        The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
