"""Generation providers: the external text-generation service.

A provider takes a prompt and a schema descriptor and returns the raw text
of the reply. It does not parse or validate anything; that is the job of
the ContentGenerationClient.
"""

from abc import ABC, abstractmethod

import openai
from loguru import logger
from openai import OpenAI

from .config import GenerationConfig
from .errors import TransportFailureError
from .schemas import SchemaNode

SYSTEM_PROMPT = (
    "You are a Spanish teacher writing short practice exercises. "
    "Reply with a single JSON document that follows the requested schema "
    "and nothing else."
)


class GenerationProvider(ABC):
    """Abstract interface for the generation provider."""

    @abstractmethod
    def generate(self, prompt: str, schema: SchemaNode) -> str:
        """Request content conforming to schema.

        Args:
            prompt: The exercise prompt.
            schema: Descriptor of the expected document.

        Returns:
            The raw reply text, possibly fenced or non-conformant.

        Raises:
            TransportFailureError: If the provider cannot be reached.
        """
        ...


class OpenAIProvider(GenerationProvider):
    """Provider backed by the OpenAI Chat Completions API."""

    def __init__(self, config: GenerationConfig, client: OpenAI | None = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.config.has_api_key:
                raise TransportFailureError(
                    "OPENAI_API_KEY is not configured; cannot reach the provider"
                )
            self._client = OpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout_seconds,
            )
        return self._client

    def generate(self, prompt: str, schema: SchemaNode) -> str:
        logger.debug(f"Calling chat.completions.create (model: {self.config.model})")
        try:
            completion = self.client.chat.completions.create(
                model=self.config.model,
                temperature=self.config.temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "exercise",
                        "schema": schema.to_json_schema(),
                        "strict": False,
                    },
                },
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.OpenAIError as e:
            raise TransportFailureError(f"Generation request failed: {e}") from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
