"""Tests for the declarative form model."""

from foodingo.forms import (
    REQUIRED_MESSAGE,
    FieldType,
    FormField,
    FormState,
    initial_form_data,
    validate_form,
)

FIELDS = [
    FormField(name="name", label="Name", required=True),
    FormField(name="cuisine", label="Cuisine", type=FieldType.DROPDOWN, options=["Indian", "Italian"]),
    FormField(name="banner", label="Banner", type=FieldType.IMAGE, required=True),
]


def test_initial_values():
    assert initial_form_data(FIELDS) == {"name": "", "cuisine": "", "banner": None}


def test_required_fields():
    errors = validate_form(FIELDS, {"name": "  ", "cuisine": "", "banner": None})

    assert errors == {"name": REQUIRED_MESSAGE, "banner": REQUIRED_MESSAGE}


def test_dropdown_rejects_unknown_option():
    errors = validate_form(FIELDS, {"name": "A", "cuisine": "Thai", "banner": {"url": "u"}})

    assert errors == {"cuisine": "Select a valid cuisine"}


def test_editing_clears_field_error():
    form = FormState(FIELDS)

    assert not form.validate()
    assert set(form.errors) == {"name", "banner"}

    form.set("name", "Dosa Corner")
    assert "name" not in form.errors

    form.set("banner", {"url": "https://img.test/b.png"})
    assert form.validate()
