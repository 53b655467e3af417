"""
Editor state kept in dcc.Store.

The store holds the current Document together with where the last change
came from. The URL observer needs that origin: a reset strips the query
string back to the bare path, every other change rewrites it.
"""

from dataclasses import dataclass, field
from enum import Enum

from invoicegen.models.document import Document, default_document


class Origin(str, Enum):
    """What produced the current document."""

    DEFAULT = "default"
    LINK = "link"
    EDIT = "edit"
    RESET = "reset"


@dataclass
class EditorState:
    """
    Unified editor state stored in dcc.Store.

    Attributes:
        document: The document being edited.
        origin: What produced this document.
    """

    document: Document = field(default_factory=default_document)
    origin: Origin = Origin.DEFAULT

    def to_dict(self) -> dict:
        """Serialize state to JSON-compatible dictionary."""
        return {"document": self.document.to_dict(), "origin": self.origin.value}

    @classmethod
    def from_dict(cls, data: dict | None) -> "EditorState":
        """Deserialize dictionary to EditorState."""
        if not data:
            return cls()
        return cls(
            document=Document.from_dict(data.get("document")),
            origin=Origin(data.get("origin", Origin.DEFAULT.value)),
        )
