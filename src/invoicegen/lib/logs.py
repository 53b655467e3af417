"""
Logging utilities for invoicegen.

Provides a logger factory that creates configured Python loggers with
consistent formatting across the application.
"""

import logging
import os
from pathlib import Path

# Default log level from environment or INFO
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_PACKAGE = "invoicegen"


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), the package-relative module
    name is used, so ``src/invoicegen/services/export.py`` logs as
    ``invoicegen.services.export``.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = _module_name(Path(name))

    log = logging.getLogger(name)

    # Only configure if not already configured
    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        log.addHandler(handler)

    return log


def _module_name(path: Path) -> str:
    """Return the dotted module name for a source file inside the package."""
    parts = path.with_suffix("").parts
    if _PACKAGE not in parts:
        return path.stem
    # Innermost package directory, so a checkout named invoicegen is skipped
    start = max(i for i, part in enumerate(parts) if part == _PACKAGE)
    module = list(parts[start:])
    if module[-1] == "__init__":
        module.pop()
    return ".".join(module)
