"""
Schema Registry - static mapping from form-type identifier to FormSchema.

The registry is built once (from the packaged defaults or a YAML file) and
never mutated. Lookups of unknown identifiers, including the selector
placeholder, return None rather than raising.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from dynamic_forms.runtime.schema_loader import load_default_form_types, load_form_types
from dynamic_forms.schemas.errors import SchemaNotFound
from dynamic_forms.schemas.form_schema import FormSchema

logger = logging.getLogger(__name__)

# Selector value meaning "no form type chosen"
PLACEHOLDER_VALUE = ""
PLACEHOLDER_LABEL = "Select Form Type"


class SchemaRegistry:
    """Read-only lookup of form schemas by form-type identifier."""

    def __init__(self, schemas: Iterable[FormSchema]):
        self._schemas: Dict[str, FormSchema] = {}
        for schema in schemas:
            if schema.form_type in self._schemas:
                raise ValueError(f"Duplicate form type '{schema.form_type}'")
            if schema.form_type == PLACEHOLDER_VALUE:
                raise ValueError("Form type identifier cannot be empty")
            self._schemas[schema.form_type] = schema

    @classmethod
    def default(cls) -> "SchemaRegistry":
        """Registry with the built-in userInfo, addressInfo and paymentInfo types."""
        return cls(load_default_form_types())

    @classmethod
    def from_yaml(cls, file_path: str | Path) -> "SchemaRegistry":
        return cls(load_form_types(file_path))

    def lookup(self, form_type: Optional[str]) -> Optional[FormSchema]:
        """
        Find the schema for a form type.

        Args:
            form_type: Form-type identifier (may be the placeholder or None)

        Returns:
            The FormSchema, or None when the identifier isn't registered
        """
        if form_type is None:
            return None
        schema = self._schemas.get(form_type)
        if schema is None:
            logger.debug(f"No schema registered for form type {form_type!r}")
        return schema

    def require(self, form_type: Optional[str]) -> FormSchema:
        """Like lookup(), but raises SchemaNotFound for unknown identifiers."""
        schema = self.lookup(form_type)
        if schema is None:
            raise SchemaNotFound(form_type)
        return schema

    @property
    def form_types(self) -> List[str]:
        """Registered identifiers in registration order."""
        return list(self._schemas)

    def choices(self) -> List[Tuple[str, str]]:
        """Selector options as (value, label), headed by the placeholder."""
        options = [(PLACEHOLDER_VALUE, PLACEHOLDER_LABEL)]
        options.extend((s.form_type, s.title or s.form_type) for s in self._schemas.values())
        return options

    def __contains__(self, form_type: object) -> bool:
        return form_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
