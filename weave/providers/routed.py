"""Pick a text provider by model id."""

from weave.providers.base import DEFAULT_MAX_TOKENS, TextProvider

ANTHROPIC_MODEL_PREFIXES = ("claude",)


def provider_for_model(model: str) -> str:
    """Map a model id to a provider name: "anthropic" or "openai"."""
    if model.lower().startswith(ANTHROPIC_MODEL_PREFIXES):
        return "anthropic"
    return "openai"


class RoutedTextProvider(TextProvider):
    """Dispatches each call to the provider serving the requested model.

    Supports:
    - OpenAI: gpt-4o, gpt-4o-mini, gpt-4-turbo, etc.
    - Anthropic: claude-3-5-sonnet, claude-3-haiku, etc.
    """

    def __init__(self, providers: dict[str, TextProvider]) -> None:
        self.providers = providers

    def _provider(self, model: str) -> TextProvider:
        return self.providers[provider_for_model(model)]

    def ensure_configured(self, model: str) -> None:
        self._provider(model).ensure_configured(model)

    async def complete(
        self,
        model: str,
        user_prompt: str,
        system_prompt: str | None = None,
        images: list[str] | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float | None = None,
    ) -> str:
        return await self._provider(model).complete(
            model,
            user_prompt,
            system_prompt=system_prompt,
            images=images,
            max_tokens=max_tokens,
            temperature=temperature,
        )
