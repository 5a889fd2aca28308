"""API route for running a generation request.

Routes a request through intent classification to the text and/or image
providers. Supports OpenAI and Anthropic (Claude) models for text.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from weave.generation.orchestrator import Orchestrator, build_orchestrator
from weave.models.generation import GenerationRequest, validation_messages
from weave.providers.base import MissingCredentialError
from weave_server.identity import get_owner_id

logger = logging.getLogger(__name__)

router = APIRouter()

# Orchestrator instance (lazily initialized)
_orchestrator: Orchestrator | None = None


def get_orchestrator() -> Orchestrator:
    """Get or create the orchestrator from environment settings."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_orchestrator()
    return _orchestrator


def _failure(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


@router.post("/generate")
async def generate(
    request: Request,
    owner_id: str = Depends(get_owner_id),
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    """Run one generation request.

    Returns 400 with every validation message for a malformed body, 500 for
    a missing provider credential or a failed generation, else the result.
    """
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return _failure(400, "Request body must be JSON", errors=["Request body must be JSON"])

    try:
        generation_request = GenerationRequest.model_validate(body)
    except ValidationError as e:
        messages = validation_messages(e)
        return _failure(400, ", ".join(messages), errors=messages)

    try:
        result = await orchestrator.generate(generation_request)
    except MissingCredentialError as e:
        logger.error("Generation refused: %s", e)
        return _failure(500, str(e))
    except Exception as e:
        logger.exception("Generation failed for owner %s", owner_id)
        return _failure(500, str(e) or "An unexpected error occurred")

    if not result.success:
        return JSONResponse(status_code=500, content=result.model_dump(mode="json", by_alias=True))
    return result.model_dump(mode="json", by_alias=True)

