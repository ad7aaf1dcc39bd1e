"""Unit tests for the OpenAI-backed generation provider."""

from types import SimpleNamespace

import httpx
import openai
import pytest

from exercises.config import GenerationConfig
from exercises.errors import EmptyResultError, TransportFailureError
from exercises.generation import ContentGenerationClient
from exercises.providers import SYSTEM_PROMPT, OpenAIProvider
from exercises.schemas import get_exercise_schema
from models import ExerciseKind


def completion(*contents: str | None) -> SimpleNamespace:
    """Build a chat completion carrying one choice per content."""
    return SimpleNamespace(
        choices=[
            SimpleNamespace(message=SimpleNamespace(content=content))
            for content in contents
        ]
    )


class StubChatClient:
    """Stands in for OpenAI: exposes chat.completions.create and records kwargs."""

    def __init__(self, reply):
        self.reply = reply
        self.calls: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def config() -> GenerationConfig:
    return GenerationConfig(api_key="sk-test", model="gpt-4.1", temperature=0.3)


@pytest.fixture
def schema():
    return get_exercise_schema(ExerciseKind.SER_VS_ESTAR)


class TestGenerate:
    """Tests for OpenAIProvider.generate."""

    def test_returns_message_content(self, config, schema):
        client = StubChatClient(completion('{"title": "Ser o Estar"}'))
        provider = OpenAIProvider(config, client=client)

        assert provider.generate("prompt", schema.descriptor) == '{"title": "Ser o Estar"}'

    def test_sends_json_schema_response_format(self, config, schema):
        client = StubChatClient(completion("{}"))
        provider = OpenAIProvider(config, client=client)

        provider.generate("Escribe preguntas", schema.descriptor)

        kwargs = client.calls[0]
        assert kwargs["model"] == "gpt-4.1"
        assert kwargs["temperature"] == 0.3
        assert kwargs["response_format"]["type"] == "json_schema"
        assert kwargs["response_format"]["json_schema"]["schema"] == (
            schema.descriptor.to_json_schema()
        )
        assert kwargs["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "Escribe preguntas"},
        ]

    def test_no_choices_returns_empty_text(self, config, schema):
        provider = OpenAIProvider(config, client=StubChatClient(completion()))

        assert provider.generate("prompt", schema.descriptor) == ""

    def test_none_content_returns_empty_text(self, config, schema):
        provider = OpenAIProvider(config, client=StubChatClient(completion(None)))

        assert provider.generate("prompt", schema.descriptor) == ""


class TestTransportFailures:
    """Tests for errors reaching the provider."""

    def test_connection_error_is_transport_failure(self, config, schema):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        error = openai.APIConnectionError(request=request)
        provider = OpenAIProvider(config, client=StubChatClient(error))

        with pytest.raises(TransportFailureError) as exc_info:
            provider.generate("prompt", schema.descriptor)

        assert exc_info.value.__cause__ is error

    def test_missing_api_key_fails_before_any_call(self, schema):
        provider = OpenAIProvider(GenerationConfig(api_key=None))

        with pytest.raises(TransportFailureError, match="OPENAI_API_KEY"):
            provider.generate("prompt", schema.descriptor)


class TestClientWithProvider:
    """Tests for the client on top of the real provider."""

    def test_empty_completion_is_empty_result(self, config):
        provider = OpenAIProvider(config, client=StubChatClient(completion(None)))
        client = ContentGenerationClient(provider, config)

        with pytest.raises(EmptyResultError):
            client.request_exercise(ExerciseKind.SER_VS_ESTAR)
