"""Configuration file loading and validation."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, HttpUrl, ValidationError, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import (
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    LLM_TOP_P,
    LOG_FILE_DEFAULT,
    OLLAMA_MODEL_DEFAULT,
    OLLAMA_URL_DEFAULT,
    OPENAI_API_KEY_ENV,
    OPENAI_MAX_TOKENS,
    OPENAI_MODEL_DEFAULT,
    OPENAI_TEMPERATURE,
    TIMEOUT_LLM_REQUEST,
)
from .enums import BackendType
from .errors import ConfigException

logger = logging.getLogger(__name__)

ENV_PREFIX = "FORMFORGE_"


class OllamaConfig(BaseModel):
    """Local Ollama generation endpoint configuration."""

    base_url: HttpUrl = Field(default=OLLAMA_URL_DEFAULT)
    model: str = Field(default=OLLAMA_MODEL_DEFAULT, min_length=1)


class OpenAIConfig(BaseModel):
    """Hosted chat-completion API configuration."""

    api_key: str | None = None
    base_url: HttpUrl | None = None
    model: str = Field(default=OPENAI_MODEL_DEFAULT, min_length=1)
    temperature: float = Field(default=OPENAI_TEMPERATURE, ge=0, le=2)
    max_tokens: int = Field(default=OPENAI_MAX_TOKENS, gt=0)

    def resolve_api_key(self) -> str | None:
        return self.api_key or os.environ.get(OPENAI_API_KEY_ENV)


class LLMConfig(BaseModel):
    """Text-completion backend selection and sampling parameters."""

    backend: BackendType = Field(default=BackendType.OLLAMA)
    timeout: int = Field(default=TIMEOUT_LLM_REQUEST, ge=1)
    temperature: float = Field(default=LLM_TEMPERATURE, ge=0, le=2)
    top_p: float = Field(default=LLM_TOP_P, gt=0, le=1)
    max_tokens: int = Field(default=LLM_MAX_TOKENS, gt=0)
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)


class WebConfig(BaseModel):
    """Web service configuration."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    reload: bool = Field(default=False)


class Config(BaseSettings):
    """Application configuration."""

    log_file: str = Field(default=LOG_FILE_DEFAULT)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @model_validator(mode="after")
    def warn_missing_openai_key(self) -> "Config":
        if self.llm.backend == BackendType.OPENAI and not self.llm.openai.resolve_api_key():
            logger.warning(
                f"OpenAI backend selected but no API key configured "
                f"(set llm.openai.api_key or {OPENAI_API_KEY_ENV})"
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix=ENV_PREFIX,
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            raise ConfigException(_format_validation_error(e)) from e
        except ValueError as e:
            # tomllib.TOMLDecodeError subclasses ValueError
            raise ConfigException(f"Invalid configuration file {config_path}: {e}") from e

    @classmethod
    def load_or_default(cls, config_path: str | None) -> "Config":
        """Load configuration from path, or fall back to env and defaults when absent."""
        if config_path and Path(config_path).exists():
            return cls.load_from_file(config_path)

        if config_path:
            logger.info(f"Configuration file {config_path} not found, using defaults")
        try:
            return cls()
        except ValidationError as e:
            raise ConfigException(_format_validation_error(e)) from e


def _format_validation_error(e: ValidationError) -> str:
    error_lines = ["Configuration validation failed:"]
    for error in e.errors():
        loc = " -> ".join(str(item) for item in error["loc"])
        error_lines.append(f"  - {loc}: {error['msg']}")
    return "\n".join(error_lines)
