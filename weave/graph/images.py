"""Getting images in and out of image nodes.

Providers need inline bytes, storage wants durable URLs. ``ImageFetcher``
turns a durable reference back into inline bytes; ``attach_image`` uploads
new inline bytes and keeps them as a fallback when the upload fails.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable

import httpx

from weave.models.graph import ImageNode
from weave.utils.data_urls import DEFAULT_MIME_TYPE, is_data_url, is_durable_url, to_data_url

if TYPE_CHECKING:
    from weave.graph.store import GraphStore

logger = logging.getLogger(__name__)


class ImageFetcher:
    """Resolve an image reference to an inline data URL."""

    def __init__(self, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.timeout = timeout
        self._transport = transport

    async def to_inline(self, url: str) -> str | None:
        """Return a data URL for ``url``, or None if it cannot be fetched."""
        if is_data_url(url):
            return url
        if not is_durable_url(url):
            logger.warning("Cannot resolve image reference %r", url[:64])
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch image %s: %s", url, e)
            return None

        mime_type = response.headers.get("content-type", DEFAULT_MIME_TYPE).split(";")[0].strip()
        return to_data_url(response.content, mime_type or DEFAULT_MIME_TYPE)


async def attach_image(
    store: GraphStore,
    node_id: str,
    data_url: str,
    upload: Callable[[str], Awaitable[str]],
) -> ImageNode | None:
    """Put a freshly picked image into an image node.

    The image is uploaded for a durable URL and the inline bytes are kept for
    provider calls. If the upload fails the inline bytes double as the display
    URL so the image is not lost.
    """
    try:
        url = await upload(data_url)
    except Exception:
        logger.exception("Image upload failed for node %s, keeping inline bytes", node_id)
        url = data_url
    return store.update_node_data(node_id, {"image_url": url, "image_base64": data_url})
