"""Hosted chat-completion backend using the OpenAI SDK."""

import logging

import openai
from openai import OpenAI

from ..config import LLMConfig
from ..errors import BackendUnavailableError
from ..utils import sanitize

logger = logging.getLogger(__name__)


class OpenAIChatBackend:
    """Send a system + user message pair to a chat-completion model."""

    name = "openai"

    def __init__(
        self,
        api_key: str | None,
        model: str,
        temperature: float,
        max_tokens: int,
        timeout: int,
        base_url: str | None = None,
        client=None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._api_key = api_key
        self._base_url = base_url
        self._client = client

        logger.debug(
            f"OpenAIChatBackend initialized: model={model}, api_key={sanitize(api_key)}"
        )

    @classmethod
    def from_config(cls, config: LLMConfig) -> "OpenAIChatBackend":
        return cls(
            api_key=config.openai.resolve_api_key(),
            model=config.openai.model,
            temperature=config.openai.temperature,
            max_tokens=config.openai.max_tokens,
            timeout=config.timeout,
            base_url=str(config.openai.base_url) if config.openai.base_url else None,
        )

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self._api_key:
                raise BackendUnavailableError("OpenAI API key is not configured")
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        logger.info(f"Calling OpenAI model {self.model} (timeout: {self.timeout}s)")
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as e:
            raise BackendUnavailableError(f"OpenAI API error: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise BackendUnavailableError("No response from OpenAI")

        logger.debug(f"OpenAI response length: {len(content)}")
        return content
