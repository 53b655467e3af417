"""Shared fixtures and fakes for the invoicegen tests."""

import requests
import pytest

from invoicegen.lib.caches import ImageCache
from invoicegen.models.document import default_document

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png"
FAKE_PDF = b"%PDF-1.7\nfake document\n%%EOF"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, content: bytes, content_type: str, status: int = 200):
        self.content = content
        self.headers = {"Content-Type": content_type} if content_type else {}
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """
    HTTP session serving canned responses and recording every request.

    URLs listed in ``failing`` raise a connection error; unknown URLs return 404.
    """

    def __init__(self, responses=None, failing=()):
        self.responses = dict(responses or {})
        self.failing = set(failing)
        self.calls: list[str] = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        if url in self.failing:
            raise requests.ConnectionError(f"cannot reach {url}")
        if url not in self.responses:
            return FakeResponse(b"", "text/html", status=404)
        return self.responses[url]


class RecordingRenderer:
    """PDF renderer that records the print HTML it was handed."""

    def __init__(self, output: bytes = FAKE_PDF):
        self.output = output
        self.calls: list[tuple[str, str | None]] = []

    def __call__(self, html: str, base_url: str | None) -> bytes:
        self.calls.append((html, base_url))
        return self.output

    @property
    def html(self) -> str:
        return self.calls[-1][0]


@pytest.fixture
def document():
    return default_document()


@pytest.fixture
def image_cache(tmp_path):
    cache = ImageCache(tmp_path / "images")
    yield cache
    cache.close()
