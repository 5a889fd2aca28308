"""Request and result models for a single generation run."""

from enum import Enum

from pydantic import Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from weave.models.graph import CamelModel


class Intent(str, Enum):
    """The output shape a generation request should produce."""

    text_only = "text_only"
    image_only = "image_only"
    both = "both"


class GenerationRequest(CamelModel):
    """A generation request as sent by a generator node."""

    model: str = Field(default="", validate_default=True)
    system_prompt: str | None = None
    user_prompt: str = Field(default="", validate_default=True)
    images: list[str] | None = None  # inline data URLs

    @field_validator("model")
    @classmethod
    def _require_model(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("model_required", "Model is required")
        return value

    @field_validator("user_prompt")
    @classmethod
    def _require_user_prompt(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("user_prompt_required", "User prompt is required")
        return value


class GenerationResult(CamelModel):
    """Outcome of a generation run."""

    success: bool
    content: str | None = None
    image: str | None = None  # generated image as a data URL
    error: str | None = None
    intent: Intent | None = None


def validation_messages(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into human readable messages."""
    messages = []
    for error in exc.errors():
        if error["type"] in ("model_required", "user_prompt_required"):
            messages.append(error["msg"])
            continue
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages
