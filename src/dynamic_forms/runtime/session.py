"""
Form Session - the editing state machine.

States:
- IDLE: no form type selected
- EDITING: a schema is loaded and values are being entered

A successful commit hands a Record to the store and folds back to IDLE.
Progress is recomputed directly after every selection or value change,
so readers never see a value from before the latest mutation.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from dynamic_forms.runtime.record_store import RecordStore
from dynamic_forms.runtime.registry import SchemaRegistry
from dynamic_forms.runtime.validators import is_empty, validate_values
from dynamic_forms.schemas.errors import (
    InvalidSessionState,
    UnknownField,
    ValidationFailed,
)
from dynamic_forms.schemas.form_schema import FormSchema
from dynamic_forms.schemas.record import Record

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


class CommitAction(str, Enum):
    """What a successful commit did to the store."""

    CREATED = "created"
    UPDATED = "updated"


COMMIT_MESSAGES = {
    CommitAction.CREATED: "Form submitted successfully!",
    CommitAction.UPDATED: "Changes saved successfully.",
}


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a successful commit."""

    action: CommitAction
    index: int
    record: Record

    @property
    def message(self) -> str:
        return COMMIT_MESSAGES[self.action]


class FormSession:
    """
    One editing context: selected form type, in-progress values and edit target.

    Sessions are independent values; create one per editor and pass it
    explicitly. The registry is shared read-only.
    """

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry
        self._schema: Optional[FormSchema] = None
        self._values: Dict[str, Any] = {}
        self._edit_target: Optional[int] = None
        self._progress: float = 0.0

    # ---- read-only state ----

    @property
    def state(self) -> SessionState:
        return SessionState.EDITING if self._schema is not None else SessionState.IDLE

    @property
    def schema(self) -> Optional[FormSchema]:
        return self._schema

    @property
    def active_form_type(self) -> Optional[str]:
        return self._schema.form_type if self._schema is not None else None

    @property
    def values(self) -> Mapping[str, Any]:
        return MappingProxyType(self._values)

    @property
    def edit_target(self) -> Optional[int]:
        return self._edit_target

    @property
    def progress(self) -> float:
        """Progress as of the latest mutation, 0-100."""
        return self._progress

    # ---- transitions ----

    def select_form_type(self, form_type: Optional[str]) -> Optional[FormSchema]:
        """
        Load a form type and start editing it with empty values.

        Unknown identifiers (including the placeholder) return the session
        to IDLE. Any edit target is cleared either way.

        Args:
            form_type: Form-type identifier chosen in the selector

        Returns:
            The loaded schema, or None when nothing was loaded
        """
        schema = self.registry.lookup(form_type)
        self._edit_target = None

        if schema is None:
            self._clear()
            logger.debug(f"Form type {form_type!r} not registered; session is idle")
            return None

        self._schema = schema
        self._values = {name: "" for name in schema.field_names}
        self._recompute_progress()
        logger.debug(f"Selected form type '{schema.form_type}' ({len(schema.fields)} fields)")
        return schema

    def set_field_value(self, name: str, value: Any) -> float:
        """
        Overwrite one field's value and recompute progress.

        Returns:
            Progress after the change

        Raises:
            InvalidSessionState: If no form type is selected
            UnknownField: If name isn't a field of the active schema
        """
        self._require_editing("set a field value")
        if name not in self._values:
            raise UnknownField(name, self.active_form_type)

        self._values[name] = value
        return self._recompute_progress()

    def load_values(self, values: Mapping[str, Any], edit_target: Optional[int] = None) -> None:
        """
        Pre-populate the active schema's fields, e.g. from a record being edited.

        Keys outside the schema are ignored; schema fields missing from
        values are left empty.
        """
        self._require_editing("load values")
        for name in self._values:
            self._values[name] = values.get(name, "")
        self._edit_target = edit_target
        self._recompute_progress()

    def compute_progress(self) -> float:
        """Percentage of fields holding a non-empty value; 0 with no schema loaded."""
        if self._schema is None or not self._schema.fields:
            return 0.0
        filled = sum(1 for name in self._schema.field_names if not is_empty(self._values.get(name)))
        return filled / len(self._schema.fields) * 100

    def validate(self) -> Dict[str, str]:
        """Per-field messages for the current values (empty when all valid)."""
        self._require_editing("validate")
        return validate_values(self._schema, self._values)

    def commit(self, store: RecordStore) -> CommitResult:
        """
        Validate all fields and store the values as a record.

        Appends when there is no edit target, otherwise replaces the record
        at the target index. On success the session returns to IDLE.

        Raises:
            InvalidSessionState: If no form type is selected (including a
                repeated commit after a successful one)
            ValidationFailed: If any field is invalid; values are kept
            IndexOutOfRange: If the edit target no longer exists in the store
        """
        self._require_editing("commit")

        errors = validate_values(self._schema, self._values)
        if errors:
            raise ValidationFailed(errors)

        record = Record(form_type=self._schema.form_type, values=self._values)
        if self._edit_target is None:
            index = store.append(record)
            action = CommitAction.CREATED
        else:
            index = self._edit_target
            store.update_at(index, record)
            action = CommitAction.UPDATED

        logger.info(f"Committed {record.form_type} record ({action.value}) at index {index}")
        self._clear()
        return CommitResult(action, index, record)

    def cancel_edit(self) -> None:
        """Discard values and edit target and return to IDLE."""
        self._clear()

    def clear_edit_target(self) -> None:
        """Forget the edit target; a later commit will append instead."""
        self._edit_target = None

    # ---- helpers ----

    def _require_editing(self, operation: str) -> None:
        if self._schema is None:
            raise InvalidSessionState(operation, self.state.value)

    def _recompute_progress(self) -> float:
        self._progress = self.compute_progress()
        return self._progress

    def _clear(self) -> None:
        self._schema = None
        self._values = {}
        self._edit_target = None
        self._progress = 0.0
