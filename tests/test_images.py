from __future__ import annotations

from pathlib import Path

import pytest

from wallet_secure.core.images import (
    decode_data_uri,
    embedded_image_bytes,
    image_to_data_uri,
    is_data_uri,
)


def test_image_to_data_uri(tmp_path: Path) -> None:
    image = tmp_path / "poliza.png"
    image.write_bytes(b"\x89PNG\r\n\x1a\nfake")

    uri = image_to_data_uri(image)

    assert uri.startswith("data:image/png;base64,")
    assert is_data_uri(uri)
    assert decode_data_uri(uri) == b"\x89PNG\r\n\x1a\nfake"


def test_image_to_data_uri_rejects_non_images(tmp_path: Path) -> None:
    document = tmp_path / "poliza.txt"
    document.write_text("texto", encoding="utf-8")

    with pytest.raises(ValueError):
        image_to_data_uri(document)


def test_decode_data_uri_rejects_urls() -> None:
    assert is_data_uri("https://images.unsplash.com/photo.jpg") is False
    with pytest.raises(ValueError):
        decode_data_uri("https://images.unsplash.com/photo.jpg")
    with pytest.raises(ValueError):
        decode_data_uri("data:image/png,raw")


def test_embedded_image_bytes_tolerates_bad_values() -> None:
    assert embedded_image_bytes("data:image/png;base64,aGVsbG8=") == b"hello"
    assert embedded_image_bytes("data:image/png;base64,%%%not-base64") is None
    assert embedded_image_bytes("data:image/png,raw") is None
    assert embedded_image_bytes("https://images.unsplash.com/photo.jpg") is None
    assert embedded_image_bytes("") is None
