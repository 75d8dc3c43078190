"""Choose between LLM generation and the template fallback per request."""

import logging
from dataclasses import dataclass
from typing import Any

from .backends import get_backend
from .config import Config
from .enums import GenerationSource
from .errors import MissingPromptError, OrchestratorInternalError
from .generator import LLMFormGenerator
from .schema import Form
from .template_generator import TemplateGenerator
from .utils import truncate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    form: Form
    source: GenerationSource


class GenerationOrchestrator:
    """Generate forms, preferring the LLM and silently falling back to templates."""

    def __init__(
        self,
        llm_generator: LLMFormGenerator | None,
        template_generator: TemplateGenerator | None = None,
    ):
        self.llm_generator = llm_generator
        self.template_generator = template_generator or TemplateGenerator()

    @staticmethod
    def validate_prompt(prompt: Any) -> str:
        if not isinstance(prompt, str) or not prompt.strip():
            raise MissingPromptError("Prompt is required")
        return prompt

    def handle_generate(self, prompt: Any) -> GenerationResult:
        """Generate a form for the prompt.

        Every failure of the LLM path is absorbed by the template generator.

        Raises:
            MissingPromptError: If prompt is missing, not a string or blank
            OrchestratorInternalError: If the template fallback itself fails
        """
        prompt = self.validate_prompt(prompt)
        logger.info(f"Generating form for prompt: {truncate(prompt)}")

        if self.llm_generator is not None:
            try:
                logger.info("Attempting LLM generation...")
                form = self.llm_generator.generate(prompt)
                logger.info("LLM generation successful")
                return GenerationResult(form=form, source=GenerationSource.LLM)
            except Exception as e:
                logger.warning(f"LLM generation failed, using template generation: {e}")
        else:
            logger.info("No LLM backend configured, using template generation")

        try:
            form = self.template_generator.generate(prompt)
        except Exception as e:
            raise OrchestratorInternalError(f"Template generation failed: {e}") from e
        return GenerationResult(form=form, source=GenerationSource.TEMPLATE)

    @classmethod
    def from_config(cls, config: Config) -> "GenerationOrchestrator":
        backend = get_backend(config.llm)
        if backend is not None:
            logger.info(f"Using {backend.name} backend for LLM generation")
        return cls(LLMFormGenerator(backend) if backend is not None else None)
