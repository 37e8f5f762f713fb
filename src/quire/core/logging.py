"""Centralized logging configuration for Quire."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "QUIRE_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)


def _resolve_level(level_name: str | None = None) -> int:
    """Return the logging level given explicitly or via environment variable."""
    name = (level_name or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level_name: str | None = None) -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()

    managed = next(
        (handler for handler in root_logger.handlers if getattr(handler, "_quire_managed", False)),
        None,
    )
    if managed is None:
        handler = RichHandler(console=console, rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._quire_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(level_name))
    logging.captureWarnings(True)
