from invoicegen.components import build_editor
from invoicegen.layout import build_layout
from invoicegen.models import edits
from invoicegen.models.document import DocumentType


def _walk(component):
    yield component
    children = getattr(component, "children", None)
    if children is None or isinstance(children, str):
        return
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        if child is not None and not isinstance(child, (str, int, float)):
            yield from _walk(child)


def _ids(component):
    return [getattr(node, "id", None) for node in _walk(component)]


def _by_id(component, component_id):
    return next(node for node in _walk(component) if getattr(node, "id", None) == component_id)


def test_layout_has_state_plumbing():
    ids = _ids(build_layout())
    for component_id in (
        "url",
        "editor-state",
        "initial-load-trigger",
        "download-file",
        "reset-confirm",
        "export-error",
        "share-clipboard",
        "download-button",
        "editor-container",
        "preview-frame",
    ):
        assert component_id in ids


def test_preview_starts_with_rendered_document():
    frame = _by_id(build_layout(), "preview-frame")
    assert 'id="invoice-preview"' in frame.srcDoc


def test_editor_has_controls_per_item(document):
    doc = edits.add_item(document)
    ids = _ids(build_editor(doc))
    for item in doc.items:
        assert {"type": "remove-item", "item": item.id} in ids
        assert {"type": "item-field", "item": item.id, "field": "value"} in ids


def test_editor_shows_empty_items_message(document):
    doc = edits.remove_item(document, document.items[0].id)
    editor = build_editor(doc)
    texts = [getattr(node, "children", None) for node in _walk(editor)]
    assert "No items added yet." in texts


def test_invoice_no_input_follows_document_type(document):
    field_id = {"type": "doc-field", "field": "invoice_no"}
    assert _by_id(build_editor(document), field_id).disabled is True
    tax = edits.set_document_type(document, DocumentType.TAX)
    assert _by_id(build_editor(tax), field_id).disabled is False
