import importlib
import sys
import types

import pytest

RENDERER_MODULE = "invoicegen.services.pdf_renderer"


class FakeDocument:
    def __init__(self, pages):
        self.pages = list(pages)

    def copy(self, pages):
        return FakeDocument(pages)

    def write_pdf(self):
        return b"%PDF-fake " + b",".join(page.encode() for page in self.pages)


class FakeCSS:
    def __init__(self, string=None):
        self.string = string


class FakeHTML:
    instances: list["FakeHTML"] = []

    def __init__(self, string=None, base_url=None, url_fetcher=None):
        self.string = string
        self.base_url = base_url
        self.url_fetcher = url_fetcher
        self.stylesheets = None
        FakeHTML.instances.append(self)

    def render(self, stylesheets=None):
        self.stylesheets = stylesheets
        return FakeDocument(["page-1", "page-2", "page-3"])


def fake_default_url_fetcher(url, *args, **kwargs):
    return {"string": b"GIF89a", "mime_type": "image/gif", "redirected_url": url}


@pytest.fixture
def renderer(monkeypatch):
    fake = types.ModuleType("weasyprint")
    fake.HTML = FakeHTML
    fake.CSS = FakeCSS
    fake.default_url_fetcher = fake_default_url_fetcher
    FakeHTML.instances = []
    monkeypatch.setitem(sys.modules, "weasyprint", fake)
    sys.modules.pop(RENDERER_MODULE, None)
    yield importlib.import_module(RENDERER_MODULE)
    sys.modules.pop(RENDERER_MODULE, None)


def test_multi_page_render_keeps_first_page(renderer):
    assert renderer.render_pdf("<html></html>") == b"%PDF-fake page-1"


def test_a4_page_rules_are_applied(renderer):
    renderer.render_pdf("<html></html>", base_url="http://localhost:8050/")

    (html,) = FakeHTML.instances
    (stylesheet,) = html.stylesheets
    assert "size: 210mm 297mm" in stylesheet.string
    assert "margin: 0" in stylesheet.string
    assert html.base_url == "http://localhost:8050/"


def test_renderer_only_resolves_data_uris(renderer):
    renderer.render_pdf("<html></html>")

    (html,) = FakeHTML.instances
    assert html.url_fetcher is renderer.data_only_fetcher


@pytest.mark.parametrize(
    "url",
    [
        "file:///etc/passwd",
        "http://127.0.0.1:8080/admin/secret",
        "https://cdn.example.com/logo.png",
        "/assets/logos/creo-logo.svg",
    ],
)
def test_fetcher_refuses_everything_but_data(renderer, url):
    with pytest.raises(ValueError, match="Refusing to fetch"):
        renderer.data_only_fetcher(url)


def test_fetcher_delegates_data_uris(renderer):
    fetched = renderer.data_only_fetcher("data:image/gif;base64,R0lGODlh")
    assert fetched["mime_type"] == "image/gif"


def test_real_render_produces_pdf():
    try:
        import weasyprint
    except (ImportError, OSError) as exc:
        pytest.skip(f"WeasyPrint unavailable: {exc}")
    sys.modules.pop(RENDERER_MODULE, None)
    renderer = importlib.import_module(RENDERER_MODULE)

    tall = "<html><body>" + "<p>line</p>" * 400 + "</body></html>"
    assert len(weasyprint.HTML(string=tall).render().pages) > 1
    assert renderer.render_pdf(tall).startswith(b"%PDF")
