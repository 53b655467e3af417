"""
Local library modules shared across invoicegen.

Modules:
    logs: Logging utilities
    paths: Path utilities (temp dir, bundled assets, templates)
    caches: Append-only disk cache for inlined images
"""

from invoicegen.lib import caches, logs, paths

__all__ = ["caches", "logs", "paths"]
