from typing import Protocol


class TextCompletionBackend(Protocol):
    """A text-completion service that turns a system + user instruction into raw text."""

    name: str

    def complete(self, system_prompt: str, user_prompt: str) -> str: ...
