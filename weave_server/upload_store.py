"""Local filesystem storage for uploaded images.

Uploaded inline images are written under ``WEAVE_UPLOAD_DIR`` and served
back by the upload routes, which gives image nodes a durable URL.
"""

import mimetypes
import os
import re
from pathlib import Path

from weave.utils.data_urls import decode_data_url
from weave.utils.identifiers import generate_upload_id

DEFAULT_UPLOAD_DIR = Path(__file__).parent / "data" / "uploads"
UPLOAD_DIR = Path(os.getenv("WEAVE_UPLOAD_DIR", str(DEFAULT_UPLOAD_DIR)))
PUBLIC_URL = os.getenv("WEAVE_PUBLIC_URL", "http://localhost:8000")

_FILENAME_RE = re.compile(r"^[0-9a-f]+\.[a-z0-9]+$")

# mimetypes knows these, but its answers vary by platform
_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class LocalImageStorage:
    """Save data URLs as files and hand out URLs for them."""

    def __init__(self, directory: Path, public_url: str) -> None:
        self.directory = Path(directory)
        self.public_url = public_url.rstrip("/")

    def save(self, data_url: str) -> str:
        """Store an inline image and return its public URL.

        Raises ValueError if ``data_url`` is not a base64 image.
        """
        mime_type, data = decode_data_url(data_url)
        if not mime_type.startswith("image/"):
            raise ValueError(f"Unsupported content type: {mime_type}")
        if not data:
            raise ValueError("Empty image")

        extension = _EXTENSIONS.get(mime_type) or mimetypes.guess_extension(mime_type) or ".bin"
        filename = f"{generate_upload_id()}{extension}"
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / filename).write_bytes(data)
        return f"{self.public_url}/api/uploads/{filename}"

    def resolve(self, filename: str) -> Path | None:
        """Path of a stored upload, or None for unknown or malformed names."""
        if not _FILENAME_RE.match(filename):
            return None
        path = self.directory / filename
        if not path.is_file():
            return None
        return path
