"""
Layout helpers for the invoicegen Dash application.

This module defines the root layout structure including:
- URL tracking for the shareable query string
- dcc.Store components for the editor state
- Dialogs for the reset confirmation and export failures
- Toolbar, editor form and live preview

The layout renders the default document immediately; the document encoded
in the URL, if any, replaces it once the initial-load-trigger fires.
"""

from dash import dcc, html

from invoicegen.components import build_editor, build_preview, build_toolbar
from invoicegen.models.document import default_document
from invoicegen.rendering import render_document
from invoicegen.state import (
    APP_TITLE,
    EXPORT_FAILED_MESSAGE,
    RESET_CONFIRM_MESSAGE,
    SHARE_LABEL,
)

# How long the share button shows its confirmation, in milliseconds
SHARE_FEEDBACK_MS = 2000


def build_layout() -> html.Div:
    """
    Build the root layout for the invoicegen application.

    Creates the complete Dash layout including:
    - Hidden state stores (dcc.Store) for the editor state
    - Location, download and clipboard plumbing
    - Header toolbar with reset, share and download actions
    - Editor form on the left, preview on the right

    Returns:
        Root html.Div containing the complete application layout.
    """
    document = default_document()
    return html.Div(
        className="app-shell",
        children=[
            # Address bar; read once at startup, then only written
            dcc.Location(id="url", refresh=False),
            # Download component for PDF exports
            dcc.Download(id="download-file"),
            # Serialized EditorState
            dcc.Store(id="editor-state", data=None),
            # Set to 1 to trigger the one-time decode of the URL on mount
            dcc.Store(id="initial-load-trigger", data=1),
            # Restores the share label after the confirmation has been shown
            dcc.Interval(
                id="share-reset-timer",
                interval=SHARE_FEEDBACK_MS,
                max_intervals=1,
                disabled=True,
            ),
            dcc.ConfirmDialog(id="reset-confirm", message=RESET_CONFIRM_MESSAGE),
            dcc.ConfirmDialog(id="export-error", message=EXPORT_FAILED_MESSAGE),
            build_toolbar(APP_TITLE, SHARE_LABEL),
            html.Div(
                className="workspace",
                children=[
                    html.Div(
                        id="editor-container",
                        className="editor-pane",
                        children=build_editor(document),
                    ),
                    build_preview(render_document(document)),
                ],
            ),
        ],
    )
