"""Tests for provider adapters, driven through mocked transports and clients."""

import asyncio
import json
from types import SimpleNamespace

import anthropic
import httpx
import openai
import pytest

from weave.config import Settings
from weave.generation.orchestrator import build_orchestrator
from weave.models.generation import GenerationRequest
from weave.providers.anthropic_text import AnthropicTextProvider, build_content
from weave.providers.base import MissingCredentialError, ProviderError
from weave.providers.clipdrop import ClipdropImageProvider
from weave.providers.openai_text import OpenAITextProvider, build_messages
from weave.providers.routed import RoutedTextProvider, provider_for_model

from conftest import ScriptedTextProvider

PNG = "data:image/png;base64,AAAA"

CHAT_COMPLETION = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "created": 0,
    "model": "gpt-4o",
    "choices": [
        {"index": 0, "message": {"role": "assistant", "content": "Hello there"}, "finish_reason": "stop"}
    ],
}


class FakeAnthropicMessages:
    """Stands in for ``AsyncAnthropic.messages``, recording call parameters."""

    def __init__(self, reply: str | Exception) -> None:
        self.reply = reply
        self.calls: list[dict] = []

    async def create(self, **params):
        self.calls.append(params)
        if isinstance(self.reply, Exception):
            raise self.reply
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.reply)])


def fake_anthropic_client(reply: str | Exception) -> SimpleNamespace:
    return SimpleNamespace(messages=FakeAnthropicMessages(reply))


class TestOpenAIProvider:
    """Test the OpenAI chat adapter."""

    def test_build_messages(self):
        messages = build_messages("what is this?", "Be brief.", [PNG])
        assert messages[0] == {"role": "system", "content": "Be brief."}
        content = messages[1]["content"]
        assert content[0] == {"type": "image_url", "image_url": {"url": PNG}}
        assert content[-1] == {"type": "text", "text": "what is this?"}

    def test_build_messages_without_system(self):
        messages = build_messages("hi")
        assert [m["role"] for m in messages] == ["user"]

    def test_complete(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json=CHAT_COMPLETION)

        client = openai.AsyncOpenAI(
            api_key="test-key",
            max_retries=0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        provider = OpenAITextProvider("test-key", client=client)
        reply = asyncio.run(provider.complete("gpt-4o", "hello", system_prompt="sys", temperature=0))

        assert reply == "Hello there"
        assert seen["model"] == "gpt-4o"
        assert seen["max_tokens"] == 4096
        assert seen["temperature"] == 0

    def test_api_error_becomes_provider_error(self):
        client = openai.AsyncOpenAI(
            api_key="test-key",
            max_retries=0,
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": {"message": "boom"}}))
            ),
        )
        provider = OpenAITextProvider("test-key", client=client)
        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(provider.complete("gpt-4o", "hello"))
        assert str(exc_info.value).startswith("OpenAI API error:")

    def test_missing_key(self):
        with pytest.raises(MissingCredentialError) as exc_info:
            OpenAITextProvider(None).ensure_configured("gpt-4o")
        assert "OPENAI_API_KEY" in str(exc_info.value)


class TestAnthropicProvider:
    """Test the Anthropic messages adapter."""

    def test_build_content(self):
        content = build_content("describe", ["data:image/jpeg;base64,/9g="])
        assert content[0]["source"] == {"type": "base64", "media_type": "image/jpeg", "data": "/9g="}
        assert content[1] == {"type": "text", "text": "describe"}

    def test_complete(self):
        client = fake_anthropic_client("Hi from Claude")
        provider = AnthropicTextProvider("test-key", client=client)
        reply = asyncio.run(provider.complete("claude-3-5-sonnet-20241022", "hello", system_prompt="sys", images=[PNG]))

        assert reply == "Hi from Claude"
        params = client.messages.calls[0]
        assert params["model"] == "claude-3-5-sonnet-20241022"
        assert params["max_tokens"] == 4096
        assert params["system"] == "sys"
        assert "temperature" not in params
        assert params["messages"][0]["content"][-1] == {"type": "text", "text": "hello"}

    def test_api_error_becomes_provider_error(self):
        provider = AnthropicTextProvider("test-key", client=fake_anthropic_client(anthropic.AnthropicError("overloaded")))
        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(provider.complete("claude-3-haiku-20240307", "hello"))
        assert str(exc_info.value) == "Anthropic API error: overloaded"

    def test_missing_key(self):
        with pytest.raises(MissingCredentialError) as exc_info:
            AnthropicTextProvider("").ensure_configured("claude-3-haiku-20240307")
        assert "ANTHROPIC_API_KEY" in str(exc_info.value)


class TestRouting:
    """Test model-based provider selection."""

    def test_provider_for_model(self):
        assert provider_for_model("claude-3-5-sonnet-20241022") == "anthropic"
        assert provider_for_model("Claude-3-haiku") == "anthropic"
        assert provider_for_model("gpt-4o-mini") == "openai"

    def test_dispatch(self):
        openai_side = ScriptedTextProvider(text="from openai")
        anthropic_side = ScriptedTextProvider(text="from anthropic")
        routed = RoutedTextProvider({"openai": openai_side, "anthropic": anthropic_side})
        assert asyncio.run(routed.complete("claude-3-haiku", "hi")) == "from anthropic"
        assert asyncio.run(routed.complete("gpt-4o", "hi")) == "from openai"

    def test_ensure_configured_checks_model_provider(self):
        routed = RoutedTextProvider({
            "openai": OpenAITextProvider("key"),
            "anthropic": AnthropicTextProvider(None),
        })
        routed.ensure_configured("gpt-4o")
        with pytest.raises(MissingCredentialError):
            routed.ensure_configured("claude-3-haiku")

    def test_build_orchestrator_without_keys_fails_fast(self):
        """no provider is called when the OpenAI key is missing."""
        orchestrator = build_orchestrator(Settings())
        with pytest.raises(MissingCredentialError):
            asyncio.run(orchestrator.generate(GenerationRequest(model="gpt-4o", user_prompt="hi")))


class TestClipdrop:
    """Test the Clipdrop image adapter."""

    def test_generate(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers["x-api-key"]
            seen["body"] = request.content
            return httpx.Response(200, content=b"\x89PNG")

        provider = ClipdropImageProvider("clip-key", transport=httpx.MockTransport(handler))
        image = asyncio.run(provider.generate("a lighthouse"))

        assert image == "data:image/png;base64,iVBORw=="
        assert seen["key"] == "clip-key"
        assert b'name="prompt"' in seen["body"]
        assert b"a lighthouse" in seen["body"]

    def test_missing_key_returns_none(self):
        assert asyncio.run(ClipdropImageProvider(None).generate("x")) is None

    def test_error_status_returns_none(self):
        provider = ClipdropImageProvider(
            "clip-key",
            transport=httpx.MockTransport(lambda request: httpx.Response(402, text="out of credits")),
        )
        assert asyncio.run(provider.generate("x")) is None

    def test_transport_error_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable")

        provider = ClipdropImageProvider("clip-key", transport=httpx.MockTransport(handler))
        assert asyncio.run(provider.generate("x")) is None
