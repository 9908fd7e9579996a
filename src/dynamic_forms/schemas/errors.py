"""Error taxonomy for the form engine.

Provides stable error codes and the exceptions that carry them. Structural
errors (unknown form type, stale record index) are recoverable: callers are
expected to render them and keep the session alive.
"""

from enum import Enum
from typing import Dict, Optional


class FormErrorCode(str, Enum):
    """Stable error codes for rejected engine operations."""

    SCHEMA_NOT_FOUND = "SCHEMA_NOT_FOUND"  # Unknown form-type identifier
    VALIDATION_FAILED = "VALIDATION_FAILED"  # One or more fields invalid at commit
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"  # Record index no longer exists
    UNKNOWN_FIELD = "UNKNOWN_FIELD"  # Field name not in the active schema
    INVALID_STATE = "INVALID_STATE"  # Operation not legal in the current session state


class FormEngineError(Exception):
    """Base class for errors raised by the form engine."""

    code: FormErrorCode = FormErrorCode.INVALID_STATE

    def __init__(self, message: str, code: Optional[FormErrorCode] = None):
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(message)


class SchemaNotFound(FormEngineError):
    """Unknown form type. Selection recovers by returning to Idle instead of raising this."""

    code = FormErrorCode.SCHEMA_NOT_FOUND

    def __init__(self, form_type: Optional[str]):
        self.form_type = form_type
        super().__init__(f"Form type not found: {form_type!r}")


class ValidationFailed(FormEngineError):
    """Raised by commit when any field is invalid; no record is stored."""

    code = FormErrorCode.VALIDATION_FAILED

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(self.errors)
        super().__init__(f"Validation failed for: {fields}")


class IndexOutOfRange(FormEngineError):
    """Record index outside the store; the store is left unchanged."""

    code = FormErrorCode.INDEX_OUT_OF_RANGE

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Record index {index} out of range (store has {size} records)")


class UnknownField(FormEngineError):
    code = FormErrorCode.UNKNOWN_FIELD

    def __init__(self, name: str, form_type: Optional[str]):
        self.name = name
        self.form_type = form_type
        super().__init__(f"Field '{name}' is not part of form type {form_type!r}")


class InvalidSessionState(FormEngineError):
    """Operation called in a state that doesn't allow it (e.g. commit while Idle)."""

    code = FormErrorCode.INVALID_STATE

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state}")
