"""Helpers for inline images encoded as base64 data URLs."""

import base64
import binascii
import re

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?;base64,(?P<data>.*)$", re.DOTALL)

DEFAULT_MIME_TYPE = "image/png"


def is_data_url(value: str | None) -> bool:
    return bool(value) and value.startswith("data:")


def is_durable_url(value: str | None) -> bool:
    """True for remote references (http/https), as opposed to inline bytes."""
    return bool(value) and value.startswith(("http://", "https://"))


def to_data_url(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def split_data_url(value: str) -> tuple[str, str]:
    """Split a data URL into (mime_type, base64 payload).

    Bare base64 strings are accepted and assumed to be PNG.
    """
    match = _DATA_URL_RE.match(value)
    if match:
        return match.group("mime") or DEFAULT_MIME_TYPE, match.group("data")
    if value.startswith("data:"):
        raise ValueError("Unsupported data URL, expected base64 encoding")
    return DEFAULT_MIME_TYPE, value


def decode_data_url(value: str) -> tuple[str, bytes]:
    """Decode a data URL into (mime_type, raw bytes)."""
    mime_type, payload = split_data_url(value)
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e
