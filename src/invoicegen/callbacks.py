"""
Dash callbacks wiring the editor, preview, URL and export together.

State flows in one direction:

    URL --(once, on mount)--> editor-state --> preview
                                   |
                                   +--> URL (write only)

The address bar is only ever read as ``State`` by ``load_document``, which is
triggered by a store that fires exactly once. No callback takes the URL as an
``Input``, so writing it can never loop back into a decode.
"""

from dash import ALL, Input, Output, State, callback, ctx, dcc, no_update

from invoicegen import state as editor
from invoicegen.components import build_editor
from invoicegen.lib import logs
from invoicegen.models.common import EditorState
from invoicegen.rendering import render_document

LOG = logs.logger(__file__)


@callback(
    Output("editor-state", "data"),
    Output("editor-container", "children"),
    Input("initial-load-trigger", "data"),
    State("url", "search"),
)
def load_document(_trigger: int, search: str | None):
    """Decode the startup URL into the editor state, once."""
    state = editor.initial_state(search)
    return state.to_dict(), build_editor(state.document)


@callback(
    Output("url", "search"),
    Input("editor-state", "data"),
    prevent_initial_call=True,
)
def sync_url(data: dict | None):
    """Mirror the current document into the address bar."""
    if data is None:
        return no_update
    return editor.url_search(EditorState.from_dict(data))


@callback(
    Output("preview-frame", "srcDoc"),
    Input("editor-state", "data"),
    prevent_initial_call=True,
)
def render_preview(data: dict | None):
    """Re-render the preview surface for the current document."""
    if data is None:
        return no_update
    return render_document(EditorState.from_dict(data).document)


@callback(
    Output("editor-state", "data", allow_duplicate=True),
    Input({"type": "doc-field", "field": ALL}, "value"),
    State("editor-state", "data"),
    prevent_initial_call=True,
)
def on_field_change(_values: list, data: dict | None):
    """Apply a single document field edit."""
    trigger = ctx.triggered_id
    if data is None or not trigger:
        return no_update
    value = ctx.triggered[0]["value"]
    new_state = editor.apply_field_edit(
        EditorState.from_dict(data), trigger["field"], value
    )
    return new_state.to_dict() if new_state else no_update


@callback(
    Output("editor-state", "data", allow_duplicate=True),
    Input({"type": "item-field", "item": ALL, "field": ALL}, "value"),
    State("editor-state", "data"),
    prevent_initial_call=True,
)
def on_item_change(_values: list, data: dict | None):
    """Apply a single line item field edit."""
    trigger = ctx.triggered_id
    if data is None or not trigger:
        return no_update
    value = ctx.triggered[0]["value"]
    new_state = editor.apply_item_edit(
        EditorState.from_dict(data), trigger["item"], trigger["field"], value
    )
    return new_state.to_dict() if new_state else no_update


@callback(
    Output("editor-state", "data", allow_duplicate=True),
    Output("editor-container", "children", allow_duplicate=True),
    Input("add-item", "n_clicks"),
    Input({"type": "remove-item", "item": ALL}, "n_clicks"),
    Input("document-type", "value"),
    Input("logo-choice", "value"),
    Input("reset-confirm", "submit_n_clicks"),
    State("editor-state", "data"),
    prevent_initial_call=True,
)
def on_structure_change(
    add_clicks, _remove_clicks, document_type, logo_choice, reset_clicks, data
):
    """
    Apply edits that change the shape of the form.

    These rebuild the editor so that controls match the new document: item
    cards appear or disappear, the title and invoice number follow the
    document type, and the custom logo field shows the picked logo.
    """
    trigger = ctx.triggered_id
    if not trigger:
        return no_update, no_update
    current = EditorState.from_dict(data)

    if trigger == "reset-confirm":
        new_state = editor.reset_state() if reset_clicks else None
    elif data is None:
        return no_update, no_update
    elif trigger == "add-item":
        new_state = editor.add_item(current) if add_clicks else None
    elif trigger == "document-type":
        new_state = editor.select_document_type(current, document_type)
    elif trigger == "logo-choice":
        # None means a custom URL is in use; there is nothing to pick.
        if logo_choice is None:
            return no_update, no_update
        new_state = editor.select_logo(current, logo_choice)
    elif isinstance(trigger, dict) and trigger.get("type") == "remove-item":
        clicked = ctx.triggered[0]["value"]
        new_state = editor.remove_item(current, trigger["item"]) if clicked else None
    else:
        new_state = None

    if new_state is None:
        return no_update, no_update
    return new_state.to_dict(), build_editor(new_state.document)


@callback(
    Output("reset-confirm", "displayed"),
    Input("reset-button", "n_clicks"),
    prevent_initial_call=True,
)
def confirm_reset(_n_clicks):
    """Ask for confirmation before discarding the document."""
    return True


@callback(
    Output("share-clipboard", "content"),
    Output("share-label", "children"),
    Output("share-reset-timer", "disabled"),
    Output("share-reset-timer", "n_intervals"),
    Input("share-clipboard", "n_clicks"),
    State("editor-state", "data"),
    State("url", "href"),
    prevent_initial_call=True,
)
def share_document(_n_clicks, data: dict | None, href: str | None):
    """
    Put the shareable link on the clipboard and confirm it briefly.

    The copy itself happens in the browser when ``dcc.Clipboard`` receives the
    new content, and the component reports no result back. The confirmation
    therefore means the link was built and handed to the clipboard; a copy the
    browser refuses still shows it. A link that cannot be built shows nothing.
    """
    try:
        link = editor.share_link(EditorState.from_dict(data), href or "")
    except Exception:
        LOG.warning("Failed to build share link", exc_info=True)
        return no_update, no_update, no_update, no_update
    return link, editor.SHARE_COPIED_LABEL, False, 0


@callback(
    Output("share-label", "children", allow_duplicate=True),
    Output("share-reset-timer", "disabled", allow_duplicate=True),
    Input("share-reset-timer", "n_intervals"),
    prevent_initial_call=True,
)
def reset_share_label(n_intervals: int | None):
    """Restore the share label once the confirmation has been shown."""
    if not n_intervals:
        return no_update, no_update
    return editor.SHARE_LABEL, True


@callback(
    Output("download-file", "data"),
    Output("export-error", "displayed"),
    Input("download-button", "n_clicks"),
    State("editor-state", "data"),
    State("url", "href"),
    running=[(Output("download-button", "disabled"), True, False)],
    prevent_initial_call=True,
)
def download_pdf(_n_clicks, data: dict | None, href: str | None):
    """
    Export the current document as a PDF download.

    The surface is rendered here from the stored document, exactly as the
    preview renders it; the preview markup held by the browser is not used.

    Any failure is reported once through the export error dialog; nothing is
    downloaded and the editor state is left as it was.
    """
    document = EditorState.from_dict(data).document
    try:
        result = editor.get_export_pipeline().export(
            render_document(document),
            invoice_no=document.invoice_no,
            date=document.date,
            base_url=href,
        )
    except Exception:
        LOG.error("Error generating PDF", exc_info=True)
        return no_update, True
    return dcc.send_bytes(result.content, result.filename), False
