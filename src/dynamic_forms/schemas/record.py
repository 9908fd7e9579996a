"""Committed form records."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

# Raw values as entered; None means the field was never set.
FieldValue = Optional[Any]


@dataclass(frozen=True)
class Record:
    """Immutable snapshot of a session's values, captured at commit time."""

    form_type: str
    values: Mapping[str, FieldValue] = field(default_factory=dict)

    def __post_init__(self):
        # Own copy, detached from the caller's dict
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __hash__(self) -> int:
        return hash((self.form_type, frozenset(self.values.items())))

    def get(self, name: str, default: FieldValue = None) -> FieldValue:
        return self.values.get(name, default)

    def to_dict(self) -> Dict[str, FieldValue]:
        """Flat row: formType first, then field values."""
        row: Dict[str, FieldValue] = {"formType": self.form_type}
        row.update(self.values)
        return row
