"""Enumeration type definitions"""

from enum import Enum


class FieldType(str, Enum):
    """Input control types a form field can render as"""

    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    NUMBER = "number"
    PASSWORD = "password"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DATE = "date"
    FILE = "file"


class BackendType(str, Enum):
    """Text-completion backends available to the LLM form generator"""

    OLLAMA = "ollama"
    OPENAI = "openai"
    NONE = "none"


class GenerationSource(str, Enum):
    LLM = "llm"
    TEMPLATE = "template"


class ExportFormat(str, Enum):
    JSON = "json"
    HTML = "html"
    BUNDLE = "bundle"


# Display names used by the editor's field type picker.
FIELD_TYPE_LABELS = {
    FieldType.TEXT: "Text",
    FieldType.EMAIL: "Email",
    FieldType.TEL: "Phone",
    FieldType.NUMBER: "Number",
    FieldType.PASSWORD: "Password",
    FieldType.TEXTAREA: "Textarea",
    FieldType.SELECT: "Select",
    FieldType.CHECKBOX: "Checkbox",
    FieldType.RADIO: "Radio",
    FieldType.DATE: "Date",
    FieldType.FILE: "File Upload",
}
