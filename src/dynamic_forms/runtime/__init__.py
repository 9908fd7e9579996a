"""
Runtime module for schema-driven forms.

This module provides the core engine:
- Schema registry (form type -> field schema)
- Field validation
- Form session state machine with progress tracking
- Record store with create, in-place edit and delete
"""

from dynamic_forms.runtime.engine import DELETE_MESSAGE, EngineSnapshot, FormEngine
from dynamic_forms.runtime.record_store import RecordStore
from dynamic_forms.runtime.registry import SchemaRegistry
from dynamic_forms.runtime.schema_loader import SchemaLoadError, load_form_types
from dynamic_forms.runtime.session import (
    CommitAction,
    CommitResult,
    FormSession,
    SessionState,
)
from dynamic_forms.runtime.validators import (
    FieldValidationResult,
    validate_field,
    validate_values,
)

__all__ = [
    "DELETE_MESSAGE",
    "EngineSnapshot",
    "FormEngine",
    "RecordStore",
    "SchemaRegistry",
    "SchemaLoadError",
    "load_form_types",
    "CommitAction",
    "CommitResult",
    "FormSession",
    "SessionState",
    "FieldValidationResult",
    "validate_field",
    "validate_values",
]
