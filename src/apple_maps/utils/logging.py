"""Logger helpers so every module reports under the ``apple_maps`` namespace."""

from __future__ import annotations

import logging

LOGGER_NAME = "apple_maps"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger for *name*.

    Module names that already live inside the package are used as-is so the
    logger hierarchy mirrors the import path.
    """

    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False) -> None:
    """Install a basic console handler for command line usage."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
