"""
Invoice Generator: A Dash application for GST proforma and tax invoices.

This package provides a live editor for one-page Indian GST invoices, a
shareable link that carries the whole document in its query string, and a
one-page A4 PDF export.

Subpackages:
- components: Dash UI components (toolbar, editor form, preview)
- models: Document model, typed edits and editor state
- services: Tax computation, URL codec and PDF export
- rendering: Jinja templates for the document and its print wrapper
- lib: Logging, paths and the image cache

Main entry points:
- app.main(): Start the development server
- app.app: The Dash application instance (for WSGI deployment)
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
