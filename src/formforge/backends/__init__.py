from ..config import LLMConfig
from ..enums import BackendType
from ..errors import ConfigException

from .base import TextCompletionBackend
from .ollama import OllamaBackend
from .openai_chat import OpenAIChatBackend


def get_backend(config: LLMConfig) -> TextCompletionBackend | None:
    """Build the configured text-completion backend, or None when LLM generation is off."""
    backend_type = config.backend

    if backend_type == BackendType.NONE:
        return None

    if backend_type == BackendType.OLLAMA:
        return OllamaBackend.from_config(config)

    if backend_type == BackendType.OPENAI:
        return OpenAIChatBackend.from_config(config)

    raise ConfigException(f"Unknown LLM backend: {backend_type}")


__all__ = [
    "OllamaBackend",
    "OpenAIChatBackend",
    "TextCompletionBackend",
    "get_backend",
]
