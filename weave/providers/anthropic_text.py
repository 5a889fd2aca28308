"""Anthropic (Claude) messages API as a text provider."""

import anthropic

from weave.providers.base import (
    DEFAULT_MAX_TOKENS,
    MissingCredentialError,
    ProviderError,
    TextProvider,
)
from weave.utils.data_urls import split_data_url


def build_content(user_prompt: str, images: list[str] | None = None) -> list[dict]:
    """Images go in as base64 source blocks ahead of the text block."""
    content = []
    for image in images or []:
        media_type, data = split_data_url(image)
        content.append({
            "type": "image",
            "source": {"type": "base64", "media_type": media_type, "data": data},
        })
    content.append({"type": "text", "text": user_prompt})
    return content


class AnthropicTextProvider(TextProvider):
    """Calls the Anthropic messages API."""

    def __init__(
        self,
        api_key: str | None,
        timeout: float = 120.0,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Get or create the Anthropic client."""
        if self._client is None:
            self.ensure_configured("")
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def ensure_configured(self, model: str) -> None:
        if not self.api_key and self._client is None:
            raise MissingCredentialError(
                "ANTHROPIC_API_KEY is not configured. Please add it to your .env file."
            )

    async def complete(
        self,
        model: str,
        user_prompt: str,
        system_prompt: str | None = None,
        images: list[str] | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float | None = None,
    ) -> str:
        client = self._get_client()
        params = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": build_content(user_prompt, images)}],
        }
        if system_prompt:
            params["system"] = system_prompt
        if temperature is not None:
            params["temperature"] = temperature

        try:
            response = await client.messages.create(**params)
        except anthropic.AnthropicError as e:
            raise ProviderError(f"Anthropic API error: {e}") from e

        if not response.content:
            return ""
        return "".join(
            block.text for block in response.content
            if hasattr(block, "text")
        )
