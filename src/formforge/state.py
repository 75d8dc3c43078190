"""Form editing as pure transitions over immutable Form values.

Every operation takes the current Form and returns an :class:`EditResult` with
a new Form; the input Form is never modified and the result shares no mutable
state with it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import ValidationError

from .consts import FIELD_ID_PREFIX, NEW_FIELD_LABEL, NEW_SECTION_TITLE, SECTION_ID_PREFIX
from .enums import FieldType
from .errors import EditError
from .schema import Form
from .utils import IdGenerator

logger = logging.getLogger(__name__)

FORM_UPDATABLE_KEYS = frozenset({"title", "description"})
SECTION_UPDATABLE_KEYS = frozenset({"id", "title", "description"})
FIELD_UPDATABLE_KEYS = frozenset(
    {"id", "type", "label", "placeholder", "required", "options", "validation", "description"}
)

_default_ids = IdGenerator()


@dataclass(frozen=True, slots=True)
class EditResult:
    form: Form
    notice: str | None = None
    changed: bool = True


def _rebuild(data: dict[str, Any]) -> Form:
    try:
        return Form.from_dict(data)
    except ValidationError as e:
        raise EditError(f"Edit produces an invalid form: {e.errors()[0]['msg']}") from e


def _check_section_index(data: dict[str, Any], section_index: int) -> None:
    if not 0 <= section_index < len(data["sections"]):
        raise EditError(f"Section index out of range: {section_index}")


def _check_updates(updates: dict[str, Any], allowed: frozenset[str], entity: str) -> None:
    if not isinstance(updates, dict):
        raise EditError(f"{entity.capitalize()} updates must be an object")
    unknown = sorted(set(updates) - allowed)
    if unknown:
        raise EditError(f"Cannot update {entity} attribute(s): {', '.join(unknown)}")


def add_field(form: Form, section_index: int, ids: IdGenerator | None = None) -> EditResult:
    data = form.to_dict()
    _check_section_index(data, section_index)

    new_field = {
        "id": (ids or _default_ids).next(FIELD_ID_PREFIX),
        "type": FieldType.TEXT.value,
        "label": NEW_FIELD_LABEL,
        "required": False,
    }
    data["sections"][section_index]["fields"].append(new_field)
    return EditResult(_rebuild(data), "Field added successfully")


def remove_field(form: Form, section_index: int, field_index: int) -> EditResult:
    data = form.to_dict()
    _check_section_index(data, section_index)

    fields = data["sections"][section_index]["fields"]
    if not 0 <= field_index < len(fields):
        logger.debug(f"Ignoring removal of missing field {section_index}/{field_index}")
        return EditResult(_rebuild(data), None, changed=False)

    del fields[field_index]
    return EditResult(_rebuild(data), "Field removed successfully")


def add_section(form: Form, ids: IdGenerator | None = None) -> EditResult:
    data = form.to_dict()
    data["sections"].append(
        {
            "id": (ids or _default_ids).next(SECTION_ID_PREFIX),
            "title": NEW_SECTION_TITLE,
            "fields": [],
        }
    )
    return EditResult(_rebuild(data), "Section added successfully")


def remove_section(form: Form, section_index: int) -> EditResult:
    data = form.to_dict()
    if len(data["sections"]) == 1:
        return EditResult(_rebuild(data), "Cannot remove the last section", changed=False)

    _check_section_index(data, section_index)
    del data["sections"][section_index]
    return EditResult(_rebuild(data), "Section removed successfully")


def update_form(form: Form, updates: dict[str, Any]) -> EditResult:
    _check_updates(updates, FORM_UPDATABLE_KEYS, "form")
    data = form.to_dict()
    data.update(updates)
    return EditResult(_rebuild(data))


def update_section(form: Form, section_index: int, updates: dict[str, Any]) -> EditResult:
    _check_updates(updates, SECTION_UPDATABLE_KEYS, "section")
    data = form.to_dict()
    _check_section_index(data, section_index)
    data["sections"][section_index].update(updates)
    return EditResult(_rebuild(data))


def update_field(
    form: Form, section_index: int, field_index: int, updates: dict[str, Any]
) -> EditResult:
    _check_updates(updates, FIELD_UPDATABLE_KEYS, "field")
    data = form.to_dict()
    _check_section_index(data, section_index)

    fields = data["sections"][section_index]["fields"]
    if not 0 <= field_index < len(fields):
        raise EditError(f"Field index out of range: {field_index}")
    fields[field_index].update(updates)
    return EditResult(_rebuild(data))


OPERATIONS: dict[str, Callable[..., EditResult]] = {
    "add_field": add_field,
    "remove_field": remove_field,
    "add_section": add_section,
    "remove_section": remove_section,
    "update_form": update_form,
    "update_section": update_section,
    "update_field": update_field,
}


_ID_OPERATIONS = frozenset({"add_field", "add_section"})


def apply_edit(
    form: Form,
    operation: str,
    args: dict[str, Any] | None = None,
    ids: IdGenerator | None = None,
) -> EditResult:
    """Dispatch an edit by operation name.

    Raises:
        EditError: If the operation is unknown, its arguments do not match, or the
            result would not be a valid form
    """
    func = OPERATIONS.get(operation)
    if func is None:
        raise EditError(f"Unknown edit operation: {operation}")

    kwargs = {k: v for k, v in (args or {}).items() if k != "ids"}
    if operation in _ID_OPERATIONS and ids is not None:
        kwargs["ids"] = ids

    try:
        return func(form, **kwargs)
    except TypeError as e:
        raise EditError(f"Invalid arguments for {operation}: {e}") from e


class FormStateStore:
    """Owns the Form of one editing session and applies edits to it."""

    def __init__(self, form: Form, ids: IdGenerator | None = None):
        self._form = form
        self._ids = ids or IdGenerator()

    @property
    def form(self) -> Form:
        return self._form

    def apply(self, operation: str, **args) -> EditResult:
        result = apply_edit(self._form, operation, args, ids=self._ids)
        self._form = result.form
        if result.notice:
            logger.info(result.notice)
        return result

    def add_field(self, section_index: int) -> EditResult:
        return self.apply("add_field", section_index=section_index)

    def remove_field(self, section_index: int, field_index: int) -> EditResult:
        return self.apply("remove_field", section_index=section_index, field_index=field_index)

    def add_section(self) -> EditResult:
        return self.apply("add_section")

    def remove_section(self, section_index: int) -> EditResult:
        return self.apply("remove_section", section_index=section_index)

    def update_form(self, **updates) -> EditResult:
        return self.apply("update_form", updates=updates)

    def update_section(self, section_index: int, **updates) -> EditResult:
        return self.apply("update_section", section_index=section_index, updates=updates)

    def update_field(self, section_index: int, field_index: int, **updates) -> EditResult:
        return self.apply(
            "update_field", section_index=section_index, field_index=field_index, updates=updates
        )
