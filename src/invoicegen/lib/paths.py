"""
Path utilities for invoicegen.

Provides convenience functions for the package's on-disk locations: the
system temporary directory used for caches and the bundled static assets.
"""

import tempfile
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


def temp_dir() -> Path:
    """
    Return the system temporary directory as a Path.

    Returns:
        Path object pointing to the system temp directory.
    """
    return Path(tempfile.gettempdir())


def assets_dir() -> Path:
    """Return the directory Dash serves under ``/assets/``."""
    return _PACKAGE_DIR / "assets"


def templates_dir() -> Path:
    """Return the directory holding the document templates."""
    return _PACKAGE_DIR / "rendering" / "templates"
