"""
Top navigation bar with the document actions.

- Reset: opens a confirmation dialog before restoring the defaults
- Share: copies the shareable link to the clipboard
- Download PDF: exports the preview, disabled while an export runs
"""

from dash import dcc, html
from dash_iconify import DashIconify

from invoicegen.models.document import DEFAULT_LOGO_URL


def build_toolbar(title: str, share_label: str) -> html.Header:
    """
    Build the application header.

    Args:
        title: Application title shown next to the logo.
        share_label: Initial text of the share button.

    Returns:
        Header element with the action buttons.
    """
    return html.Header(
        className="toolbar",
        children=[
            html.Div(
                className="toolbar-brand",
                children=[
                    html.Img(src=DEFAULT_LOGO_URL, alt="Logo", className="toolbar-logo"),
                    html.H1(title),
                ],
            ),
            html.Div(
                className="toolbar-actions",
                children=[
                    html.Button(
                        id="reset-button",
                        className="icon-button",
                        title="Reset to Defaults",
                        children=DashIconify(icon="lucide:refresh-cw", width=18),
                    ),
                    html.Div(
                        className="button secondary gap share-button",
                        children=[
                            dcc.Clipboard(
                                id="share-clipboard",
                                className="share-clipboard",
                                title="Copy share link",
                            ),
                            html.Span(share_label, id="share-label"),
                        ],
                    ),
                    html.Button(
                        id="download-button",
                        className="button primary gap",
                        children=[
                            DashIconify(icon="lucide:download", className="button-icon"),
                            "Download PDF",
                        ],
                    ),
                ],
            ),
        ],
    )
