"""Local Ollama generation endpoint backend."""

import logging

import requests

from ..config import LLMConfig
from ..errors import BackendUnavailableError

logger = logging.getLogger(__name__)


class OllamaBackend:
    """Send a single non-streaming prompt to Ollama's ``/api/generate``."""

    name = "ollama"

    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float,
        top_p: float,
        max_tokens: int,
        timeout: int,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: LLMConfig) -> "OllamaBackend":
        return cls(
            base_url=str(config.ollama.base_url),
            model=config.ollama.model,
            temperature=config.temperature,
            top_p=config.top_p,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
        )

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the raw ``response`` text of one generation.

        The local endpoint takes a single prompt string, so the system and user
        instructions are joined by a blank line.

        Raises:
            BackendUnavailableError: On transport errors, timeouts, non-success
                status codes or an empty response
        """
        url = f"{self.base_url}/api/generate"
        payload = {
            "model": self.model,
            "prompt": f"{system_prompt}\n\n{user_prompt}",
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "top_p": self.top_p,
                "max_tokens": self.max_tokens,
            },
        }

        logger.info(f"Calling Ollama model {self.model} (timeout: {self.timeout}s)")
        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise BackendUnavailableError(
                f"Ollama request timed out after {self.timeout}s"
            ) from e
        except requests.RequestException as e:
            raise BackendUnavailableError(f"Ollama request failed: {e}") from e

        if not response.ok:
            raise BackendUnavailableError(f"Ollama API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise BackendUnavailableError("Ollama returned a non-JSON body") from e

        content = data.get("response") if isinstance(data, dict) else None
        if not content:
            raise BackendUnavailableError("No response from Ollama")

        logger.debug(f"Ollama response length: {len(content)}")
        return content
