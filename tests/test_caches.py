from invoicegen.lib.caches import ImageCache


def test_missing_entry(image_cache):
    assert image_cache.get("https://example.com/a.png") is None
    assert "https://example.com/a.png" not in image_cache


def test_add_is_append_only(image_cache):
    url = "https://example.com/a.png"
    assert image_cache.add(url, "data:image/png;base64,AAAA") is True
    assert image_cache.add(url, "data:image/png;base64,BBBB") is False
    assert image_cache.get(url).value == "data:image/png;base64,AAAA"
    assert len(image_cache) == 1


def test_get_or_load_calls_loader_once(image_cache):
    calls = []

    def loader():
        calls.append(1)
        return "data:image/svg+xml;base64,PHN2Zz4="

    first = image_cache.get_or_load("/logo.svg", loader)
    second = image_cache.get_or_load("/logo.svg", loader)

    assert first == second
    assert len(calls) == 1


def test_entries_survive_reopen(tmp_path):
    cache = ImageCache(tmp_path / "images")
    cache.add("u", "data:image/png;base64,AA==")
    cache.close()

    reopened = ImageCache(tmp_path / "images")
    try:
        assert reopened.get("u").value == "data:image/png;base64,AA=="
    finally:
        reopened.close()
