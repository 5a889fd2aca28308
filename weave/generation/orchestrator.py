"""Turn a generation request into text, an image, or both.

Flow for one request:
1. Check credentials for every model the request may touch.
2. Classify the combined prompt with the intent router.
3. Text call and/or image call. For BOTH they run concurrently.
4. Image prompts are derived from the input images (when present) through a
   vision description call, with fallbacks for refusals and failures.
"""

import asyncio
import logging

from weave.config import Settings
from weave.generation.intent import IntentRouter, combined_prompt
from weave.generation.prompts import (
    DESCRIPTION_FAILED_TEMPLATE,
    DESCRIPTION_SYSTEM_PROMPT,
    DESCRIPTION_USER_TEMPLATE,
    IMAGE_FAILED_ERROR,
    IMAGE_ONLY_CONTENT,
    REFUSAL_FALLBACK_TEMPLATE,
    is_refusal,
    with_both_clause,
)
from weave.models.generation import GenerationRequest, GenerationResult, Intent
from weave.providers.anthropic_text import AnthropicTextProvider
from weave.providers.base import ImageProvider, ProviderError, TextProvider
from weave.providers.clipdrop import ClipdropImageProvider
from weave.providers.openai_text import OpenAITextProvider
from weave.providers.routed import RoutedTextProvider

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION_MODEL = "gpt-4o"


class Orchestrator:
    """Runs one generation request end to end.

    Provider failures become failure results (text) or a missing image
    (image); only a missing credential is raised, and always before any
    provider is called.
    """

    def __init__(
        self,
        text_provider: TextProvider,
        image_provider: ImageProvider,
        router: IntentRouter,
        description_model: str = DEFAULT_DESCRIPTION_MODEL,
    ) -> None:
        self.text_provider = text_provider
        self.image_provider = image_provider
        self.router = router
        self.description_model = description_model

    def ensure_configured(self, request: GenerationRequest) -> None:
        """Raise MissingCredentialError if any model this request may use lacks a key."""
        self.router.provider.ensure_configured(self.router.model)
        if request.images:
            self.text_provider.ensure_configured(self.description_model)
        self.text_provider.ensure_configured(request.model)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.ensure_configured(request)

        intent = await self.router.classify(combined_prompt(request.system_prompt, request.user_prompt))
        logger.info("Generating with model %s, intent %s", request.model, intent.value)

        if intent == Intent.text_only:
            content, error = await self._complete_text(request, request.system_prompt)
            if error is not None:
                return GenerationResult(success=False, error=error, intent=intent)
            return GenerationResult(success=True, content=content, intent=intent)

        if intent == Intent.image_only:
            image = await self._generate_image(request)
            if image is None:
                return GenerationResult(success=False, error=IMAGE_FAILED_ERROR, intent=intent)
            return GenerationResult(success=True, content=IMAGE_ONLY_CONTENT, image=image, intent=intent)

        (content, error), image = await asyncio.gather(
            self._complete_text(request, with_both_clause(request.system_prompt)),
            self._generate_image(request),
        )
        if error is not None:
            return GenerationResult(success=False, error=error, intent=intent)
        if image is None:
            logger.warning("Image generation failed, returning text only")
        return GenerationResult(success=True, content=content, image=image, intent=intent)

    async def _complete_text(
        self, request: GenerationRequest, system_prompt: str | None
    ) -> tuple[str | None, str | None]:
        """Returns (content, error); exactly one of them is set."""
        try:
            content = await self.text_provider.complete(
                request.model,
                request.user_prompt,
                system_prompt=system_prompt,
                images=request.images,
            )
        except ProviderError as e:
            logger.error("Text generation failed: %s", e)
            return None, str(e)
        return content, None

    async def _generate_image(self, request: GenerationRequest) -> str | None:
        prompt = await self.derive_image_prompt(request.user_prompt, request.images)
        return await self.image_provider.generate(prompt)

    async def derive_image_prompt(self, user_prompt: str, images: list[str] | None) -> str:
        """Build the image generation prompt.

        Without input images the user prompt is used as is. With images, a
        vision model describes their style and folds in the request; a
        refusal or a failed call falls back to a generic art-style template.
        """
        if not images:
            return user_prompt

        try:
            description = await self.text_provider.complete(
                self.description_model,
                DESCRIPTION_USER_TEMPLATE.format(prompt=user_prompt),
                system_prompt=DESCRIPTION_SYSTEM_PROMPT,
                images=images,
            )
        except ProviderError as e:
            logger.warning("Image description failed, using fallback prompt: %s", e)
            return DESCRIPTION_FAILED_TEMPLATE.format(prompt=user_prompt)

        if not description or not description.strip():
            return user_prompt
        if is_refusal(description):
            logger.info("Image description was refused, using fallback prompt")
            return REFUSAL_FALLBACK_TEMPLATE.format(prompt=user_prompt)
        return description


def build_orchestrator(settings: Settings | None = None) -> Orchestrator:
    """Wire the real providers from settings (environment by default)."""
    settings = settings or Settings.from_env()
    timeout = settings.provider_timeout_sec
    openai_provider = OpenAITextProvider(settings.openai_api_key, timeout=timeout)
    text_provider = RoutedTextProvider({
        "openai": openai_provider,
        "anthropic": AnthropicTextProvider(settings.anthropic_api_key, timeout=timeout),
    })
    image_provider = ClipdropImageProvider(
        settings.clipdrop_api_key,
        url=settings.clipdrop_url,
        timeout=timeout,
    )
    return Orchestrator(
        text_provider=text_provider,
        image_provider=image_provider,
        router=IntentRouter(openai_provider, model=settings.intent_model),
        description_model=settings.description_model,
    )
