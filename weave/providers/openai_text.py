"""OpenAI chat completions as a text provider."""

import openai

from weave.providers.base import (
    DEFAULT_MAX_TOKENS,
    MissingCredentialError,
    ProviderError,
    TextProvider,
)


def build_messages(
    user_prompt: str,
    system_prompt: str | None = None,
    images: list[str] | None = None,
) -> list[dict]:
    """Build chat messages: optional system prompt, then images and text as one user turn."""
    messages: list[dict] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})

    content: list[dict] = [
        {"type": "image_url", "image_url": {"url": image}}
        for image in images or []
    ]
    content.append({"type": "text", "text": user_prompt})
    messages.append({"role": "user", "content": content})
    return messages


class OpenAITextProvider(TextProvider):
    """Calls OpenAI chat completions. Images are passed as data URLs."""

    def __init__(
        self,
        api_key: str | None,
        timeout: float = 120.0,
        client: openai.AsyncOpenAI | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> openai.AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            self.ensure_configured("")
            self._client = openai.AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def ensure_configured(self, model: str) -> None:
        if not self.api_key and self._client is None:
            raise MissingCredentialError(
                "OPENAI_API_KEY is not configured. Please add it to your .env file."
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
            "messages": build_messages(user_prompt, system_prompt, images),
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            params["temperature"] = temperature

        try:
            response = await client.chat.completions.create(**params)
        except openai.OpenAIError as e:
            raise ProviderError(f"OpenAI API error: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
