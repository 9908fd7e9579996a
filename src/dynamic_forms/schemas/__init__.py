"""Data model for form types, records and engine errors."""

from dynamic_forms.schemas.errors import (
    FormEngineError,
    FormErrorCode,
    IndexOutOfRange,
    InvalidSessionState,
    SchemaNotFound,
    UnknownField,
    ValidationFailed,
)
from dynamic_forms.schemas.form_schema import (
    FieldDefinition,
    FieldKind,
    FormSchema,
    ValidationRule,
)
from dynamic_forms.schemas.record import Record

__all__ = [
    "FieldDefinition",
    "FieldKind",
    "FormSchema",
    "ValidationRule",
    "Record",
    "FormEngineError",
    "FormErrorCode",
    "IndexOutOfRange",
    "InvalidSessionState",
    "SchemaNotFound",
    "UnknownField",
    "ValidationFailed",
]
