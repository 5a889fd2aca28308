"""Classify a prompt as text, image, or both."""

import logging

from weave.generation.prompts import IMAGE_KEYWORDS, INTENT_SYSTEM_PROMPT
from weave.models.generation import Intent
from weave.providers.base import ProviderError, TextProvider

logger = logging.getLogger(__name__)

DEFAULT_INTENT_MODEL = "gpt-4o-mini"


def combined_prompt(system_prompt: str | None, user_prompt: str) -> str:
    return f"{system_prompt or ''} {user_prompt}".strip()


def has_image_keyword(prompt: str) -> bool:
    lowered = prompt.lower()
    return any(keyword in lowered for keyword in IMAGE_KEYWORDS)


def parse_intent(reply: str | None) -> Intent | None:
    """Match a classifier reply against the closed label set."""
    label = (reply or "").strip().lower()
    try:
        return Intent(label)
    except ValueError:
        return None


class IntentRouter:
    """Asks a cheap model for the intent label, then applies keyword overrides.

    The classifier reply is trusted only when it is exactly one of the known
    labels. Anything else, including a failed call, counts as text only. A
    keyword match can turn text only into image only but never into both.
    """

    def __init__(self, provider: TextProvider, model: str = DEFAULT_INTENT_MODEL) -> None:
        self.provider = provider
        self.model = model

    async def classify(self, prompt: str) -> Intent:
        try:
            reply = await self.provider.complete(
                self.model,
                prompt,
                system_prompt=INTENT_SYSTEM_PROMPT,
                max_tokens=10,
                temperature=0,
            )
            intent = parse_intent(reply)
            if intent is None:
                logger.info("Unrecognized intent label %r, defaulting to text_only", reply)
                intent = Intent.text_only
        except ProviderError as e:
            logger.warning("Intent detection failed: %s", e)
            intent = Intent.text_only

        if intent == Intent.text_only and has_image_keyword(prompt):
            intent = Intent.image_only
        return intent
