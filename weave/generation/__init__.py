"""Intent routing and generation orchestration."""

from weave.generation.intent import IntentRouter, combined_prompt, has_image_keyword, parse_intent
from weave.generation.orchestrator import Orchestrator, build_orchestrator

__all__ = [
    "IntentRouter",
    "Orchestrator",
    "build_orchestrator",
    "combined_prompt",
    "has_image_keyword",
    "parse_intent",
]
