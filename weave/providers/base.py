"""Provider interfaces for text and image generation."""

DEFAULT_MAX_TOKENS = 4096


class ProviderError(Exception):
    """Raised when a provider call fails (transport, quota, bad response)."""
    pass


class MissingCredentialError(Exception):
    """Raised before any call when a provider's API key is not configured."""
    pass


class TextProvider:
    """Protocol for text generation, optionally with images as vision input."""

    async def complete(
        self,
        model: str,
        user_prompt: str,
        system_prompt: str | None = None,
        images: list[str] | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float | None = None,
    ) -> str:
        """Return the model's reply text. Raises ProviderError on failure."""
        raise NotImplementedError

    def ensure_configured(self, model: str) -> None:
        """Raise MissingCredentialError if ``model`` cannot be served."""
        return None


class ImageProvider:
    """Protocol for text-to-image generation."""

    async def generate(self, prompt: str) -> str | None:
        """Return the generated image as a data URL, or None on any failure."""
        raise NotImplementedError
