"""Form definition data model shared by generators, the editor and renderers."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import FieldType


class Validation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    min_length: Optional[int] = Field(default=None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(default=None, alias="maxLength", ge=0)
    pattern: Optional[str] = None
    min: Optional[int | float] = None
    max: Optional[int | float] = None

    @model_validator(mode="after")
    def check_bounds(self) -> Validation:
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.max_length < self.min_length
        ):
            raise ValueError("maxLength must be greater than or equal to minLength")
        if self.min is not None and self.max is not None and self.max < self.min:
            raise ValueError("max must be greater than or equal to min")
        return self


class FormField(BaseModel):
    id: str = Field(min_length=1)
    type: FieldType
    label: str = Field(min_length=1)
    placeholder: Optional[str] = None
    required: bool = False
    options: Optional[list[str]] = None
    validation: Optional[Validation] = None
    description: Optional[str] = None


class FormSection(BaseModel):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    fields: list[FormField] = []

    @model_validator(mode="after")
    def check_unique_field_ids(self) -> FormSection:
        seen: set[str] = set()
        for field in self.fields:
            if field.id in seen:
                raise ValueError(f"Duplicate field id '{field.id}' in section '{self.id}'")
            seen.add(field.id)
        return self


class Form(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    sections: list[FormSection]

    def to_dict(self) -> dict[str, Any]:
        """Dump to the JSON-compatible wire shape (camelCase keys, unset values omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Any) -> Form:
        return cls.model_validate(data)
