"""Language-model backed form generation."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader
from pydantic import ValidationError

from .backends import TextCompletionBackend
from .consts import TEMPLATE_SYSTEM_PROMPT, TEMPLATE_USER_PROMPT
from .enums import FieldType
from .errors import FormValidationError, ParseError
from .schema import Form
from .utils import truncate

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```\s*$")
_BEFORE_FIRST_BRACE = re.compile(r"^[^{]*")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def clean_completion(output: str) -> str:
    """Strip code fences and any prose preceding the first ``{``."""
    content = output.strip()
    content = _LEADING_FENCE.sub("", content)
    content = _TRAILING_FENCE.sub("", content)
    content = _BEFORE_FIRST_BRACE.sub("", content)
    return content.strip()


def extract_json(output: str) -> str:
    """Extract the greedy first-``{``-to-last-``}`` span from a completion.

    Raises:
        ParseError: If the output contains no brace-delimited span
    """
    match = _JSON_OBJECT.search(clean_completion(output))
    if not match:
        raise ParseError("No valid JSON found in response")
    return match.group(0)


def _stringify_option(option: Any) -> str:
    if not option:
        return ""
    if isinstance(option, bool):
        return "true"
    if isinstance(option, float) and option.is_integer():
        return str(int(option))
    if isinstance(option, (dict, list)):
        return json.dumps(option, ensure_ascii=False)
    return str(option)


def sanitize_form_data(form_data: Any) -> Any:
    """Coerce every field's ``options`` entries to strings.

    Falsy entries (``None``, ``0``, ``False``, ``""``) become the empty string.
    Sections and fields are never dropped or reordered, and running the pass on
    already sanitized data is a no-op.
    """
    if not isinstance(form_data, dict):
        return form_data

    sanitized = dict(form_data)
    sections = sanitized.get("sections")
    if not isinstance(sections, list):
        return sanitized

    new_sections = []
    for section in sections:
        if isinstance(section, dict) and isinstance(section.get("fields"), list):
            section = dict(section)
            new_fields = []
            for field in section["fields"]:
                if isinstance(field, dict) and isinstance(field.get("options"), list):
                    field = dict(field)
                    field["options"] = [_stringify_option(o) for o in field["options"]]
                new_fields.append(field)
            section["fields"] = new_fields
        new_sections.append(section)
    sanitized["sections"] = new_sections
    return sanitized


def validate_form_shape(form_data: Any) -> None:
    """Check the minimum shape: a non-empty ``title`` and a non-empty ``sections`` list.

    Raises:
        FormValidationError: If either requirement is not met
    """
    if not isinstance(form_data, dict):
        raise FormValidationError("Invalid form structure: expected a JSON object")

    title = form_data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise FormValidationError("Invalid form structure: missing 'title'")

    if not isinstance(form_data.get("sections"), list):
        raise FormValidationError("Invalid form structure: 'sections' must be an array")

    if not form_data["sections"]:
        raise FormValidationError("Invalid form structure: 'sections' must not be empty")


class LLMFormGenerator:
    """Derive a form from a natural-language prompt via a text-completion backend."""

    def __init__(self, backend: TextCompletionBackend):
        self.backend = backend
        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def build_prompts(self, prompt: str) -> tuple[str, str]:
        """Render the (system, user) instruction pair for a prompt."""
        system_prompt = self.jinja_env.get_template(TEMPLATE_SYSTEM_PROMPT).render(
            field_types=[t.value for t in FieldType],
        )
        user_prompt = self.jinja_env.get_template(TEMPLATE_USER_PROMPT).render(
            prompt=prompt,
        )
        return system_prompt, user_prompt

    def generate(self, prompt: str) -> Form:
        """Generate a form for the prompt.

        Args:
            prompt: Natural-language description of the form

        Returns:
            Validated, sanitized Form

        Raises:
            BackendUnavailableError: If the backend call fails or returns nothing
            ParseError: If no JSON object can be extracted or parsed
            FormValidationError: If the JSON does not describe a valid form
        """
        system_prompt, user_prompt = self.build_prompts(prompt)
        output = self.backend.complete(system_prompt, user_prompt)
        return self.parse(output)

    def parse(self, output: str) -> Form:
        """Turn raw completion text into a Form."""
        try:
            form_data = json.loads(extract_json(output))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON from {self.backend.name} output: {e}")
            logger.debug(f"Raw output: {truncate(output, 2000)}")
            raise ParseError(f"Failed to parse JSON from model output: {e}") from e
        except ParseError:
            logger.debug(f"Raw output: {truncate(output, 2000)}")
            raise

        validate_form_shape(form_data)
        form_data = sanitize_form_data(form_data)

        try:
            return Form.from_dict(form_data)
        except ValidationError as e:
            raise FormValidationError(f"Invalid form structure: {e.error_count()} error(s)") from e
