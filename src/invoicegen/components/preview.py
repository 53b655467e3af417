"""Live preview of the rendered document."""

from dash import html


def build_preview(surface: str) -> html.Div:
    """
    Build the preview pane.

    The rendered surface is shown in an iframe so its own stylesheet applies
    unchanged, exactly as it will be printed.

    Args:
        surface: Complete HTML of the rendered document.

    Returns:
        Div wrapping the preview iframe.
    """
    return html.Div(
        className="preview-pane",
        children=[
            html.Iframe(
                id="preview-frame",
                srcDoc=surface,
                className="preview-frame",
                title="Invoice preview",
            )
        ],
    )
