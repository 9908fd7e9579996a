"""
Form Engine - the boundary the presentation layer talks to.

Inbound events (one at a time, applied synchronously):
- select_form_type(form_type)
- set_field_value(name, value)
- commit()
- begin_edit(index)
- delete_at(index)
- cancel_edit()

Outbound state is read through snapshot(): active schema, values,
progress, the messages from the last failed commit, and the record table.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from dynamic_forms.runtime.record_store import RecordStore
from dynamic_forms.runtime.registry import SchemaRegistry
from dynamic_forms.runtime.session import CommitResult, FormSession, SessionState
from dynamic_forms.schemas.errors import IndexOutOfRange, SchemaNotFound, ValidationFailed
from dynamic_forms.schemas.form_schema import FormSchema
from dynamic_forms.schemas.record import Record

logger = logging.getLogger(__name__)

DELETE_MESSAGE = "Entry deleted successfully!"


@dataclass
class EngineSnapshot:
    """Everything the presentation layer needs to render one frame."""

    state: SessionState
    form_type: Optional[str]
    schema: Optional[FormSchema]
    values: Dict[str, Any]
    progress: float
    edit_target: Optional[int]
    errors: Dict[str, str] = field(default_factory=dict)
    columns: List[str] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)

    @property
    def is_editing_record(self) -> bool:
        return self.edit_target is not None


class FormEngine:
    """Owns one FormSession and one RecordStore and routes user events to them."""

    def __init__(
        self,
        registry: Optional[SchemaRegistry] = None,
        store: Optional[RecordStore] = None,
    ):
        self.registry = registry if registry is not None else SchemaRegistry.default()
        self.store = store if store is not None else RecordStore()
        self.session = FormSession(self.registry)
        self._errors: Dict[str, str] = {}

    @property
    def errors(self) -> Dict[str, str]:
        """Per-field messages from the last failed commit."""
        return dict(self._errors)

    @property
    def records(self) -> Tuple[Record, ...]:
        return self.store.all()

    def select_form_type(self, form_type: Optional[str]) -> Optional[FormSchema]:
        self._errors = {}
        return self.session.select_form_type(form_type)

    def set_field_value(self, name: str, value: Any) -> float:
        """Apply one input change; returns the recomputed progress."""
        progress = self.session.set_field_value(name, value)
        # Editing a field clears its stale message, others stay until next commit
        self._errors.pop(name, None)
        return progress

    def commit(self) -> CommitResult:
        """
        Validate and store the session's values.

        Raises:
            ValidationFailed: messages are also kept on self.errors
            InvalidSessionState: If no form type is selected
            IndexOutOfRange: If the record being edited was removed
        """
        try:
            result = self.session.commit(self.store)
        except ValidationFailed as e:
            self._errors = dict(e.errors)
            logger.warning(f"Commit rejected: {len(e.errors)} invalid field(s)")
            raise
        except IndexOutOfRange as e:
            logger.warning(f"Commit rejected: {e.message}")
            raise

        self._errors = {}
        return result

    def begin_edit(self, index: int) -> Record:
        """
        Load an existing record into the session for editing.

        The record's form type is selected, its values copied in, and the
        edit target set to index so the next commit updates in place.

        Raises:
            IndexOutOfRange: If index doesn't exist; the session is untouched
            SchemaNotFound: If the record's form type isn't registered; the
                session is untouched
        """
        try:
            record = self.store.begin_edit(index)
            self.registry.require(record.form_type)
        except (IndexOutOfRange, SchemaNotFound) as e:
            logger.warning(f"Edit rejected: {e.message}")
            raise

        self._errors = {}
        self.session.select_form_type(record.form_type)
        self.session.load_values(record.values, edit_target=index)
        return record

    def delete_at(self, index: int) -> Record:
        """
        Remove a record from the store.

        An edit target at or after the deleted position no longer points at
        the record it was loaded from, so it is cleared; the session keeps
        its values and a later commit appends.

        Raises:
            IndexOutOfRange: If index doesn't exist; nothing is removed
        """
        try:
            removed = self.store.delete_at(index)
        except IndexOutOfRange as e:
            logger.warning(f"Delete rejected: {e.message}")
            raise

        target = self.session.edit_target
        if target is not None and target >= index:
            logger.debug(f"Clearing edit target {target} after delete at {index}")
            self.session.clear_edit_target()

        logger.info(f"Deleted {removed.form_type} record at index {index}")
        return removed

    def cancel_edit(self) -> None:
        self._errors = {}
        self.session.cancel_edit()

    def snapshot(self) -> EngineSnapshot:
        columns, rows = self.store.table()
        return EngineSnapshot(
            state=self.session.state,
            form_type=self.session.active_form_type,
            schema=self.session.schema,
            values=dict(self.session.values),
            progress=self.session.progress,
            edit_target=self.session.edit_target,
            errors=self.errors,
            columns=columns,
            rows=rows,
        )
