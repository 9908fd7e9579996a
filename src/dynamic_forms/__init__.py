"""
Dynamic Forms - a schema-driven form engine.

This package selects a field schema by form type, validates entered values
per field, tracks completion progress, and keeps the submitted records
with create, in-place edit and delete.
"""

__version__ = "0.1.0"

from dynamic_forms.runtime import FormEngine, FormSession, RecordStore, SchemaRegistry

__all__ = [
    "FormEngine",
    "FormSession",
    "RecordStore",
    "SchemaRegistry",
]
