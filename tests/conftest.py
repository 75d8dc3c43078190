import json

import pytest

from formforge.schema import Form
from formforge.utils import IdGenerator

SAMPLE_FORM = {
    "title": "Event Registration",
    "description": "Sign up for the conference",
    "sections": [
        {
            "id": "attendee",
            "title": "Attendee",
            "fields": [
                {"id": "name", "type": "text", "label": "Name", "required": True},
                {
                    "id": "track",
                    "type": "select",
                    "label": "Track",
                    "required": False,
                    "options": ["Data Science", "Web"],
                },
            ],
        },
        {
            "id": "extras",
            "title": "Extras",
            "description": "Optional add-ons",
            "fields": [
                {"id": "terms", "type": "checkbox", "label": "Terms", "required": True},
            ],
        },
    ],
}


class FakeBackend:
    """Text-completion backend returning a canned completion or raising."""

    name = "fake"

    def __init__(self, output: str = "", error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def sample_form() -> Form:
    return Form.from_dict(SAMPLE_FORM)


@pytest.fixture
def sample_form_json() -> str:
    return json.dumps(SAMPLE_FORM)


@pytest.fixture
def fixed_ids() -> IdGenerator:
    return IdGenerator(clock=lambda: 1000)


@pytest.fixture
def fake_backend_factory():
    return FakeBackend
