"""Runtime configuration read from the environment.

Call ``load_dotenv()`` before ``Settings.from_env()`` to pick up a local .env.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    clipdrop_api_key: str | None = None

    intent_model: str = "gpt-4o-mini"  # fast and cheap
    description_model: str = "gpt-4o"  # needs vision
    clipdrop_url: str = "https://clipdrop-api.co/text-to-image/v1"
    provider_timeout_sec: float = 120.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            clipdrop_api_key=os.getenv("CLIPDROP_API_KEY") or None,
            intent_model=os.getenv("WEAVE_INTENT_MODEL", cls.intent_model),
            description_model=os.getenv("WEAVE_DESCRIPTION_MODEL", cls.description_model),
            clipdrop_url=os.getenv("CLIPDROP_API_URL", cls.clipdrop_url),
            provider_timeout_sec=float(os.getenv("WEAVE_PROVIDER_TIMEOUT_SEC", str(cls.provider_timeout_sec))),
        )
