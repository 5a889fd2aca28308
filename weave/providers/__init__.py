"""Text and image generation providers."""

from weave.providers.anthropic_text import AnthropicTextProvider
from weave.providers.base import (
    ImageProvider,
    MissingCredentialError,
    ProviderError,
    TextProvider,
)
from weave.providers.clipdrop import ClipdropImageProvider
from weave.providers.openai_text import OpenAITextProvider
from weave.providers.routed import RoutedTextProvider, provider_for_model

__all__ = [
    "AnthropicTextProvider",
    "ClipdropImageProvider",
    "ImageProvider",
    "MissingCredentialError",
    "OpenAITextProvider",
    "ProviderError",
    "RoutedTextProvider",
    "TextProvider",
    "provider_for_model",
]
