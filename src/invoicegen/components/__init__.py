"""
Dash UI components for invoicegen.

This package provides modular, composable components:
- editor: the document form with pattern-matching control ids
- preview: iframe showing the rendered document surface
- toolbar: reset, share and download actions

All components are pure functions that return Dash html/dcc elements,
making them easy to test and compose.
"""

from invoicegen.components.editor import build_editor
from invoicegen.components.preview import build_preview
from invoicegen.components.toolbar import build_toolbar

__all__ = ["build_editor", "build_preview", "build_toolbar"]
