"""Pydantic schemas for form types and their field definitions.

A FormSchema is created once per form type when the registry is built and is
never mutated afterwards; all models here are frozen.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def anchor_at_string_end(pattern: str) -> str:
    """
    Rewrite each unescaped ``$`` outside a character class to ``\\Z``.

    In Python ``$`` also matches just before a trailing newline, so
    ``^[0-9]{3}$`` would accept ``"123\\n"``. Patterns in form schemas treat
    ``$`` as the end of the value and nothing else.
    """
    out = []
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            out.append(pattern[i:i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
            out.append(ch)
        elif ch == "[":
            in_class = True
            out.append(ch)
            # A leading "^" negates; a "]" right after the opener is literal
            if pattern[i + 1:i + 2] == "^":
                out.append("^")
                i += 1
            if pattern[i + 1:i + 2] == "]":
                out.append("]")
                i += 1
        elif ch == "$":
            out.append(r"\Z")
        else:
            out.append(ch)
        i += 1
    return "".join(out)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> "re.Pattern[str]":
    return re.compile(anchor_at_string_end(pattern))


class FieldKind(str, Enum):
    """Closed set of input kinds a field can render as."""

    TEXT = "text"
    NUMBER = "number"
    PASSWORD = "password"
    DATE = "date"
    DROPDOWN = "dropdown"


class ValidationRule(BaseModel):
    """Pattern a non-empty value must match, and the message shown when it doesn't."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: str = Field(..., min_length=1, description="Regular expression")
    message: str = Field(..., min_length=1, description="Message reported on mismatch")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Validate that pattern is a valid regex."""
        try:
            compile_pattern(v)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{v}': {e}")
        return v

    def matches(self, value: str) -> bool:
        return compile_pattern(self.pattern).search(value) is not None


class FieldDefinition(BaseModel):
    """
    Static description of one input.

    Attributes:
        name: Unique identifier within its form type.
        kind: Input kind (text, number, password, date, dropdown).
        label: Display text, passed through to the presentation layer unchanged.
        required: An empty value fails validation when True.
        options: Allowed values; present only for dropdowns and never empty.
        validation: Optional pattern rule checked against non-empty values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    kind: FieldKind = Field(..., alias="type")
    label: str
    required: bool = False
    options: Optional[Tuple[str, ...]] = None
    validation: Optional[ValidationRule] = None

    @model_validator(mode="after")
    def validate_options(self):
        """Dropdowns need a non-empty option list; other kinds take none."""
        if self.kind == FieldKind.DROPDOWN:
            if not self.options:
                raise ValueError(f"Dropdown field '{self.name}' must define non-empty options")
        elif self.options is not None:
            raise ValueError(
                f"Field '{self.name}' of kind '{self.kind.value}' cannot define options"
            )
        return self

    @property
    def is_dropdown(self) -> bool:
        return self.kind == FieldKind.DROPDOWN


class FormSchema(BaseModel):
    """A form-type identifier plus its ordered field definitions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    form_type: str = Field(..., min_length=1)
    title: str = ""
    fields: Tuple[FieldDefinition, ...]

    @field_validator("fields")
    @classmethod
    def validate_unique_names(cls, v: Tuple[FieldDefinition, ...]) -> Tuple[FieldDefinition, ...]:
        """Field names must be unique within one form type."""
        seen = set()
        for field_def in v:
            if field_def.name in seen:
                raise ValueError(f"Duplicate field name '{field_def.name}'")
            seen.add(field_def.name)
        return v

    @property
    def field_names(self) -> List[str]:
        """Field names in schema order."""
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None
