"""Exception definitions for FormForge application"""


class FormForgeException(Exception):
    """Base exception for all FormForge application errors.

    All custom exceptions in the FormForge application inherit from this class.
    Use this as a catch-all for FormForge-specific errors when you don't need
    to handle specific exception types.
    """

    pass


class ConfigException(FormForgeException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class MissingPromptError(FormForgeException):
    """Raised when a generation request carries no usable prompt.

    The prompt is missing, is not a string, or is blank. This is the only
    generation failure attributed to the caller.
    """

    pass


class GenerationError(FormForgeException):
    """Raised when the LLM form generator cannot produce a form.

    Never surfaced to API callers: the orchestrator recovers from it by
    falling back to the template generator.
    """

    pass


class BackendUnavailableError(GenerationError):
    """Raised when the text-completion backend cannot be used.

    Use this exception when:
    - The backend is unreachable or the request times out
    - The backend answers with a non-success status
    - The backend returns an empty completion
    """

    pass


class ParseError(GenerationError):
    """Raised when no JSON object can be extracted from a completion."""

    pass


class FormValidationError(GenerationError):
    """Raised when parsed JSON does not have the minimum form shape."""

    pass


class EditError(FormForgeException):
    """Raised when a form edit operation is unknown or its arguments are invalid."""

    pass


class OrchestratorInternalError(FormForgeException):
    """Raised when neither the LLM nor the template generator can produce a form."""

    pass
