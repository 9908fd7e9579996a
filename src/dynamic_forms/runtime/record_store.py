"""
Record Store - ordered collection of committed records.

Insertion order is preserved except for explicit update/delete. Every
index-taking operation checks bounds first and raises IndexOutOfRange
without touching the store.
"""

import logging
from typing import Any, Dict, List, Tuple

from dynamic_forms.schemas.errors import IndexOutOfRange
from dynamic_forms.schemas.record import Record

logger = logging.getLogger(__name__)


class RecordStore:
    """In-memory list of records owned by a single logical session."""

    def __init__(self):
        self._records: List[Record] = []

    def _check_index(self, index: int) -> None:
        # Negative indices are out of range, not counted from the end
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self._records):
            raise IndexOutOfRange(index, len(self._records))

    def append(self, record: Record) -> int:
        """Add a record at the end and return its index."""
        self._records.append(record)
        index = len(self._records) - 1
        logger.debug(f"Appended {record.form_type} record at index {index}")
        return index

    def update_at(self, index: int, record: Record) -> None:
        """Replace the record at index in place."""
        self._check_index(index)
        self._records[index] = record
        logger.debug(f"Updated record at index {index}")

    def delete_at(self, index: int) -> Record:
        """Remove the record at index; later records shift down by one."""
        self._check_index(index)
        removed = self._records.pop(index)
        logger.debug(f"Deleted record at index {index}")
        return removed

    def get(self, index: int) -> Record:
        self._check_index(index)
        return self._records[index]

    def begin_edit(self, index: int) -> Record:
        """Return the record a session should be pre-populated with for editing."""
        record = self.get(index)
        logger.debug(f"Editing {record.form_type} record at index {index}")
        return record

    def all(self) -> Tuple[Record, ...]:
        """Read-only snapshot of all records, in order."""
        return tuple(self._records)

    def table(self) -> Tuple[List[str], List[List[Any]]]:
        """
        Project the store into a header row and value rows.

        Columns come from the first record (formType, then its fields), so
        records of other form types show blanks for columns they lack.

        Returns:
            (columns, rows); both empty when the store is empty
        """
        if not self._records:
            return [], []

        columns = list(self._records[0].to_dict())
        rows = []
        for record in self._records:
            row: Dict[str, Any] = record.to_dict()
            rows.append([row.get(col, "") for col in columns])
        return columns, rows

    def __len__(self) -> int:
        return len(self._records)
