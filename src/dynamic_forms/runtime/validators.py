"""
Field validation for form values.

Stateless, per-field checks applied in order, first failure wins:
- Required field checking (empty value on a required field)
- Empty optional values pass without further checks
- Pattern rule matching
- Dropdown option membership
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dynamic_forms.schemas.form_schema import FieldDefinition, FormSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldValidationResult:
    """Outcome of validating one field value."""

    valid: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "FieldValidationResult":
        return cls(valid=True)

    @classmethod
    def invalid(cls, message: str) -> "FieldValidationResult":
        return cls(valid=False, message=message)


def is_empty(value: Any) -> bool:
    """A value is empty only when unset or the empty string; 0 and False are values."""
    return value is None or value == ""


def validate_field(field_def: FieldDefinition, raw_value: Any) -> FieldValidationResult:
    """
    Validate a single raw value against its field definition.

    Args:
        field_def: Definition of the field being validated
        raw_value: Value as entered (string, None, or any stringifiable value)

    Returns:
        FieldValidationResult with the message to show when invalid
    """
    if is_empty(raw_value):
        if field_def.required:
            return FieldValidationResult.invalid(f"{field_def.label} is required.")
        return FieldValidationResult.ok()

    text = str(raw_value)

    if field_def.validation is not None and not field_def.validation.matches(text):
        return FieldValidationResult.invalid(field_def.validation.message)

    if field_def.is_dropdown and text not in field_def.options:
        return FieldValidationResult.invalid(
            f"{field_def.label} must be one of: {', '.join(field_def.options)}."
        )

    return FieldValidationResult.ok()


def validate_values(schema: FormSchema, values: Mapping[str, Any]) -> Dict[str, str]:
    """
    Validate every field of a schema against a value mapping.

    Fields missing from values are treated as empty. Keys in values that
    aren't schema fields are ignored.

    Args:
        schema: Schema whose fields are checked
        values: Field name -> raw value

    Returns:
        Field name -> message for each invalid field (empty if all valid),
        in schema order
    """
    errors = {}
    for field_def in schema.fields:
        result = validate_field(field_def, values.get(field_def.name))
        if not result.valid:
            errors[field_def.name] = result.message

    if errors:
        logger.debug(f"{schema.form_type}: {len(errors)} invalid field(s): {sorted(errors)}")
    return errors
