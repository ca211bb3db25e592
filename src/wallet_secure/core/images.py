"""Helpers for embedding policy photos as data URIs."""

from __future__ import annotations

import base64
import binascii
import mimetypes
from pathlib import Path

DATA_URI_PREFIX = "data:"


def image_to_data_uri(path: str | Path) -> str:
    """Read an image file and return it as a base64 data URI."""
    image_path = Path(path)
    mime_type, _ = mimetypes.guess_type(image_path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise ValueError(f"El archivo no es una imagen: {image_path.name}")

    encoded = base64.b64encode(image_path.read_bytes()).decode("ascii")
    return f"{DATA_URI_PREFIX}{mime_type};base64,{encoded}"


def is_data_uri(value: str) -> bool:
    return value.startswith(DATA_URI_PREFIX)


def embedded_image_bytes(value: str) -> bytes | None:
    """Return the bytes of a data URI, or None when it is missing or malformed."""
    if not is_data_uri(value):
        return None
    try:
        return decode_data_uri(value)
    except ValueError:
        return None


def decode_data_uri(uri: str) -> bytes:
    """Return the raw bytes embedded in a base64 data URI."""
    if not is_data_uri(uri):
        raise ValueError("Not a data URI.")
    header, sep, payload = uri.partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError("Only base64 data URIs are supported.")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as error:
        raise ValueError("Invalid base64 payload in data URI.") from error
