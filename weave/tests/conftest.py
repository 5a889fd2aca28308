"""Shared fixtures: scripted providers that never touch the network."""

import asyncio

import pytest

from weave.generation.intent import IntentRouter
from weave.generation.orchestrator import Orchestrator
from weave.generation.prompts import DESCRIPTION_SYSTEM_PROMPT, INTENT_SYSTEM_PROMPT
from weave.providers.base import ImageProvider, MissingCredentialError, ProviderError, TextProvider

GENERATED_IMAGE = "data:image/png;base64,R0VORVJBVEVE"
INPUT_IMAGE = "data:image/png;base64,SU5QVVQ="


class ScriptedTextProvider(TextProvider):
    """Answers classifier, description and plain text calls from fixed values.

    Calls are told apart by their system prompt. Any of the three replies can
    be an exception instance, which is raised instead.
    """

    def __init__(
        self,
        intent: str | Exception = "text_only",
        text: str | Exception = "Generated text",
        description: str | Exception = "A watercolor landscape in soft pastel light",
        missing_credential_for: tuple[str, ...] = (),
    ) -> None:
        self.intent = intent
        self.text = text
        self.description = description
        self.missing_credential_for = missing_credential_for
        self.calls: list[dict] = []

    def ensure_configured(self, model: str) -> None:
        if any(model.startswith(prefix) for prefix in self.missing_credential_for):
            raise MissingCredentialError(f"No key for {model}")

    async def complete(self, model, user_prompt, system_prompt=None, images=None, max_tokens=4096, temperature=None):
        if system_prompt == INTENT_SYSTEM_PROMPT:
            kind = "intent"
            reply = self.intent
        elif system_prompt == DESCRIPTION_SYSTEM_PROMPT:
            kind = "description"
            reply = self.description
        else:
            kind = "text"
            reply = self.text
        self.calls.append({
            "kind": kind,
            "model": model,
            "user_prompt": user_prompt,
            "system_prompt": system_prompt,
            "images": images,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if isinstance(reply, Exception):
            raise reply
        return reply

    def calls_of(self, kind: str) -> list[dict]:
        return [call for call in self.calls if call["kind"] == kind]


class ScriptedImageProvider(ImageProvider):
    def __init__(self, image: str | None = GENERATED_IMAGE) -> None:
        self.image = image
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        return self.image


@pytest.fixture
def make_orchestrator():
    """Build an orchestrator around scripted providers.

    Returns (orchestrator, text_provider, image_provider).
    """

    def factory(image: str | None = GENERATED_IMAGE, **text_kwargs):
        text_provider = ScriptedTextProvider(**text_kwargs)
        image_provider = ScriptedImageProvider(image)
        orchestrator = Orchestrator(
            text_provider=text_provider,
            image_provider=image_provider,
            router=IntentRouter(text_provider, model="gpt-4o-mini"),
        )
        return orchestrator, text_provider, image_provider

    return factory


@pytest.fixture
def provider_error():
    return ProviderError("OpenAI API error: rate limited")


@pytest.fixture
def run():
    """Run a coroutine to completion."""
    return asyncio.run
