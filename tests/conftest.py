#!/usr/bin/env python3
"""
Pytest fixtures and configuration for dynamic_forms tests.
Provides common registries, engines and schema files.
"""

import pytest

from dynamic_forms.config import reset_settings_cache
from dynamic_forms.runtime import FormEngine, FormSession, RecordStore, SchemaRegistry
from dynamic_forms.schemas import Record


@pytest.fixture
def registry():
    """Registry with the built-in form types."""
    return SchemaRegistry.default()


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def session(registry):
    return FormSession(registry)


@pytest.fixture
def engine(registry):
    """Engine with an empty store and the built-in form types."""
    return FormEngine(registry=registry)


@pytest.fixture
def user_record():
    """A committed userInfo record."""
    return Record(form_type="userInfo", values={"firstName": "Ann", "lastName": "Lee", "age": "41"})


@pytest.fixture
def address_record():
    return Record(
        form_type="addressInfo",
        values={"street": "1 Main St", "city": "Austin", "state": "Texas", "zipCode": ""},
    )


@pytest.fixture
def custom_schema_file(tmp_path):
    """Create a YAML file with a single custom form type."""
    schema_file = tmp_path / "forms.yaml"
    schema_file.write_text(
        "form_types:\n"
        "  contact:\n"
        "    title: Contact\n"
        "    fields:\n"
        "      - {name: email, type: text, label: Email, required: true,\n"
        "         validation: {pattern: '^[^@ ]+@[^@ ]+$', message: Email must contain @.}}\n"
        "      - {name: phone, type: text, label: Phone, required: false}\n",
        encoding="utf-8",
    )
    return schema_file


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from DYNAMIC_FORMS_* variables and cached settings."""
    for name in (
        "DYNAMIC_FORMS_SCHEMA_FILE",
        "DYNAMIC_FORMS_LOG_LEVEL",
        "DYNAMIC_FORMS_PROGRESS_PRECISION",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
