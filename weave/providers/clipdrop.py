"""Clipdrop text-to-image as the image provider."""

import logging

import httpx

from weave.providers.base import ImageProvider
from weave.utils.data_urls import to_data_url

logger = logging.getLogger(__name__)

DEFAULT_CLIPDROP_URL = "https://clipdrop-api.co/text-to-image/v1"


class ClipdropImageProvider(ImageProvider):
    """Posts the prompt as a multipart form and returns the PNG as a data URL.

    Every failure (missing key, non-2xx, transport error) is logged and
    reported as None; the caller decides whether that fails the request.
    """

    def __init__(
        self,
        api_key: str | None,
        url: str = DEFAULT_CLIPDROP_URL,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def generate(self, prompt: str) -> str | None:
        if not self.api_key:
            logger.error("CLIPDROP_API_KEY not configured")
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    headers={"x-api-key": self.api_key},
                    files={"prompt": (None, prompt)},
                )
        except httpx.HTTPError as e:
            logger.error("Clipdrop image generation failed: %s", e)
            return None

        if not response.is_success:
            logger.error("Clipdrop API error: %s %s", response.status_code, response.text[:500])
            return None

        return to_data_url(response.content, "image/png")
