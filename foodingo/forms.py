"""
Declarative Form Model

Field definitions plus the required-field validation used by data-entry
screens (e.g. AddRestaurant). Image fields start empty (None), all other
fields start as an empty string.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class FieldType(str, Enum):
    TEXT = "text"
    DROPDOWN = "dropdown"
    IMAGE = "image"


REQUIRED_MESSAGE = "Required field"


@dataclass
class FormField:
    name: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    options: list[str] = field(default_factory=list)
    placeholder: Optional[str] = None


def initial_form_data(fields: list[FormField]) -> dict[str, Any]:
    return {f.name: None if f.type == FieldType.IMAGE else "" for f in fields}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, dict):
        return not value
    return False


def validate_form(fields: list[FormField], data: dict[str, Any]) -> dict[str, str]:
    """
    Check required fields.

    Returns:
        dict: field name -> error message; empty when the form is valid
    """
    errors = {}
    for f in fields:
        if f.type == FieldType.DROPDOWN and f.options and data.get(f.name) not in ("", None):
            if data.get(f.name) not in f.options:
                errors[f.name] = f"Select a valid {f.label.lower()}"
                continue
        if f.required and _is_blank(data.get(f.name)):
            errors[f.name] = REQUIRED_MESSAGE
    return errors


class FormState:
    """Mutable form values and errors; editing a field clears its error."""

    def __init__(self, fields: list[FormField]):
        self.fields = fields
        self.data = initial_form_data(fields)
        self.errors: dict[str, str] = {}
        self.is_submitting = False

    def set(self, name: str, value: Any) -> None:
        self.data[name] = value
        self.errors.pop(name, None)

    def validate(self) -> bool:
        self.errors = validate_form(self.fields, self.data)
        return not self.errors
