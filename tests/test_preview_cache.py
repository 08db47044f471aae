import pytest

from visual_memory.application.services import PreviewBuilder, server_image_to_data_uri, sniff_mime_type
from visual_memory.domain.entities import Preview, PreviewCache, PreviewSource, Screenshot
from visual_memory.domain.exceptions import PreviewDecodeError

from conftest import PNG_BYTES, FakeRenderer, png_b64

PLACEHOLDER = Preview("data:placeholder", PreviewSource.PLACEHOLDER)
SERVER = Preview("data:server", PreviewSource.SERVER)
LOCAL = Preview("data:local", PreviewSource.LOCAL_FILE)


def test_first_preview_is_written():
    cache = PreviewCache()
    assert cache.offer("a.png", PLACEHOLDER) is True
    assert cache.get("a.png") is PLACEHOLDER


def test_placeholder_is_upgraded_by_real_image():
    cache = PreviewCache({"a.png": PLACEHOLDER})
    assert cache.offer("a.png", SERVER) is True
    assert cache.get("a.png") is SERVER


@pytest.mark.parametrize("existing", [SERVER, LOCAL])
@pytest.mark.parametrize("incoming", [PLACEHOLDER, SERVER, LOCAL])
def test_real_image_is_never_replaced(existing, incoming):
    cache = PreviewCache({"a.png": existing})
    assert cache.offer("a.png", Preview("data:other", incoming.source)) is False
    assert cache.get("a.png") is existing


def test_placeholder_does_not_replace_placeholder():
    cache = PreviewCache({"a.png": PLACEHOLDER})
    assert cache.offer("a.png", Preview("data:new-placeholder", PreviewSource.PLACEHOLDER)) is False


def test_merge_counts_written_entries():
    cache = PreviewCache({"a.png": SERVER})
    written = cache.merge({"a.png": PLACEHOLDER, "b.png": PLACEHOLDER})
    assert written == 1
    assert set(cache) == {"a.png", "b.png"}


def test_remove_drops_entry():
    cache = PreviewCache({"a.png": SERVER})
    assert cache.remove("a.png") is SERVER
    assert "a.png" not in cache
    assert cache.remove("a.png") is None


def test_sniff_mime_type():
    assert sniff_mime_type(PNG_BYTES) == "image/png"
    assert sniff_mime_type(b"\xff\xd8\xff\xe0rest") == "image/jpeg"
    assert sniff_mime_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert sniff_mime_type(b"unknown") == "image/jpeg"


def test_server_image_to_data_uri_rejects_garbage():
    with pytest.raises(PreviewDecodeError):
        server_image_to_data_uri("not*base64")
    with pytest.raises(PreviewDecodeError):
        server_image_to_data_uri("")


def test_listing_only_builds_missing_previews():
    renderer = FakeRenderer()
    builder = PreviewBuilder(renderer)
    cache = PreviewCache({"kept.png": SERVER, "old.png": PLACEHOLDER})
    screenshots = [
        Screenshot(filename="kept.png"),
        Screenshot(filename="old.png", image_data=png_b64()),
        Screenshot(filename="new.png"),
        Screenshot(filename="old.png"),
    ]

    previews = builder.for_listing(screenshots, cache)

    assert set(previews) == {"old.png", "new.png"}
    assert previews["old.png"].source == PreviewSource.SERVER
    assert previews["new.png"].source == PreviewSource.PLACEHOLDER
    assert renderer.rendered == ["new.png"]
