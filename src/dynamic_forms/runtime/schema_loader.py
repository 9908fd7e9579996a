"""
Utility module for loading form-type definitions from YAML.

This module turns a YAML document into validated FormSchema objects,
raising SchemaLoadError with a readable message when the structure
is not what the registry expects.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from dynamic_forms.schemas.form_schema import FormSchema

logger = logging.getLogger(__name__)

# Built-in form types shipped with the package
DEFAULT_FORM_TYPES_FILE = Path(__file__).parent / "form_types.yaml"


class SchemaLoadError(Exception):
    """Raised when a form-types file cannot be loaded or is invalid."""
    pass


def load_form_types(file_path: str | Path) -> List[FormSchema]:
    """
    Load and validate a form-types YAML file.

    Args:
        file_path: Path to the YAML file

    Returns:
        FormSchema objects in file order

    Raises:
        SchemaLoadError: If file cannot be loaded or doesn't have required structure

    Expected structure:
        form_types:
          <form_type_id>:
            title: str
            fields: [...]
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise SchemaLoadError(f"Form types file not found: {file_path}")
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in form types file: {e}")

    schemas = parse_form_types(data)
    logger.debug(f"Loaded {len(schemas)} form types from {file_path}")
    return schemas


def parse_form_types(data: Any) -> List[FormSchema]:
    """
    Build FormSchema objects from already-parsed YAML data.

    Args:
        data: Top-level mapping containing a 'form_types' key

    Returns:
        FormSchema objects in mapping order

    Raises:
        SchemaLoadError: If the structure or any field definition is invalid
    """
    if not isinstance(data, dict) or "form_types" not in data:
        raise SchemaLoadError("Form types file must contain 'form_types' key")

    form_types = data["form_types"]
    if not isinstance(form_types, dict) or not form_types:
        raise SchemaLoadError("'form_types' must be a non-empty mapping")

    schemas = []
    for form_type, body in form_types.items():
        schemas.append(_parse_form_type(str(form_type), body))
    return schemas


def _parse_form_type(form_type: str, body: Any) -> FormSchema:
    if not isinstance(body, dict):
        raise SchemaLoadError(f"Form type '{form_type}' must be a mapping")

    fields = body.get("fields")
    if not isinstance(fields, list) or not fields:
        raise SchemaLoadError(f"Form type '{form_type}' must contain a non-empty 'fields' list")

    try:
        return FormSchema(
            form_type=form_type,
            title=body.get("title") or form_type,
            fields=fields,
        )
    except ValidationError as e:
        raise SchemaLoadError(f"Invalid definition for form type '{form_type}': {e}")


def load_default_form_types() -> List[FormSchema]:
    """Load the built-in userInfo, addressInfo and paymentInfo form types."""
    return load_form_types(DEFAULT_FORM_TYPES_FILE)


def get_field_summaries(schema: FormSchema) -> List[Dict[str, Any]]:
    """
    Flatten a schema's fields into plain dicts for display.

    Args:
        schema: Schema returned by load_form_types()

    Returns:
        One dict per field with name, type, label, required, options and pattern
    """
    summaries = []
    for field_def in schema.fields:
        summaries.append({
            "name": field_def.name,
            "type": field_def.kind.value,
            "label": field_def.label,
            "required": field_def.required,
            "options": list(field_def.options) if field_def.options else [],
            "pattern": field_def.validation.pattern if field_def.validation else None,
        })
    return summaries
