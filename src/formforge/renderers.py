"""Project a Form into a preview, an editor view and exportable documents."""

import io
import json
import logging
import zipfile
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .consts import (
    SINGLE_CHECKBOX_LABEL,
    TEMPLATE_FORM_EDITOR,
    TEMPLATE_FORM_EXPORT,
    TEMPLATE_FORM_PREVIEW,
)
from .enums import FIELD_TYPE_LABELS, FieldType
from .schema import Form, FormField, FormSection
from .utils import slugify

logger = logging.getLogger(__name__)

# Field types rendered as <input type="..."> with their own type attribute.
INPUT_TYPES = frozenset(
    {
        FieldType.TEXT,
        FieldType.EMAIL,
        FieldType.TEL,
        FieldType.NUMBER,
        FieldType.PASSWORD,
        FieldType.DATE,
        FieldType.FILE,
    }
)
OPTION_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX})


def widget_for(field: FormField) -> str:
    """Name the widget a field renders as.

    One of ``input``, ``textarea``, ``select``, ``radio``, ``checkbox_group``
    (a checkbox with more than one option) or ``checkbox`` (a single toggle).
    """
    if field.type == FieldType.TEXTAREA:
        return "textarea"
    if field.type == FieldType.SELECT:
        return "select"
    if field.type == FieldType.RADIO:
        return "radio"
    if field.type == FieldType.CHECKBOX:
        return "checkbox_group" if len(field.options or []) > 1 else "checkbox"
    return "input"


def input_type(field: FormField) -> str:
    if field.type in INPUT_TYPES:
        return field.type.value
    return FieldType.TEXT.value


def shared_field_ids(form: Form) -> set[str]:
    """Field ids used in more than one section."""
    seen: set[str] = set()
    shared: set[str] = set()
    for section in form.sections:
        for field_id in {field.id for field in section.fields}:
            if field_id in seen:
                shared.add(field_id)
            seen.add(field_id)
    return shared


def _control_namer(form: Form):
    shared = shared_field_ids(form)

    def control_name(section: FormSection, field: FormField) -> str:
        if field.id in shared:
            return f"{section.id}-{field.id}"
        return field.id

    return control_name


class FormRenderer:
    """Render forms with Jinja2 templates."""

    def __init__(self):
        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(enabled_extensions=("html.j2",)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.jinja_env.filters["slugify"] = slugify
        self.jinja_env.globals.update(
            widget_for=widget_for,
            input_type=input_type,
            single_checkbox_label=SINGLE_CHECKBOX_LABEL,
        )

    def render_preview(self, form: Form) -> str:
        """Render an interactive preview fragment whose submit action is inert."""
        template = self.jinja_env.get_template(TEMPLATE_FORM_PREVIEW)
        return template.render(form=form, control_name=_control_namer(form))

    def render_editor(self, form: Form) -> str:
        template = self.jinja_env.get_template(TEMPLATE_FORM_EDITOR)
        return template.render(
            form=form,
            field_types=[(t.value, label) for t, label in FIELD_TYPE_LABELS.items()],
            option_types=[t.value for t in OPTION_TYPES],
        )

    def export_html(self, form: Form) -> str:
        """Render a standalone HTML document with an embedded stylesheet."""
        template = self.jinja_env.get_template(TEMPLATE_FORM_EXPORT)
        return template.render(form=form, control_name=_control_namer(form))


def export_json(form: Form) -> str:
    """Serialize a form as 2-space indented JSON.

    Parsing the output and exporting again yields identical text.
    """
    return json.dumps(form.to_dict(), indent=2, ensure_ascii=False)


def export_filename(form: Form, extension: str) -> str:
    """Download name for an exported form, e.g. ``contact-form.json``."""
    return f"{slugify(form.title)}.{extension}"


def export_bundle(form: Form, renderer: FormRenderer | None = None) -> bytes:
    """Zip the JSON and HTML exports of a form together."""
    renderer = renderer or FormRenderer()
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(export_filename(form, "json"), export_json(form))
        archive.writestr(export_filename(form, "html"), renderer.export_html(form))
    logger.debug(f"Bundled exports for '{form.title}' ({buffer.tell()} bytes)")
    return buffer.getvalue()
