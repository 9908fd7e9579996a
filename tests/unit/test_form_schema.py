"""Tests for form schema and record models."""

import pytest
from pydantic import ValidationError

from dynamic_forms.schemas import FieldDefinition, FieldKind, FormSchema, Record, ValidationRule
from dynamic_forms.schemas.form_schema import anchor_at_string_end


class TestFieldDefinition:
    """Tests for FieldDefinition validation."""

    def test_type_alias_accepted(self):
        """YAML uses 'type'; the model exposes it as kind."""
        field_def = FieldDefinition(**{"name": "age", "type": "number", "label": "Age"})

        assert field_def.kind == FieldKind.NUMBER
        assert field_def.required is False
        assert field_def.options is None

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            FieldDefinition(name="x", kind="checkbox", label="X")

    def test_dropdown_requires_options(self):
        """Dropdown without options is invalid."""
        with pytest.raises(ValidationError, match="non-empty options"):
            FieldDefinition(name="state", kind=FieldKind.DROPDOWN, label="State")

        with pytest.raises(ValidationError, match="non-empty options"):
            FieldDefinition(name="state", kind=FieldKind.DROPDOWN, label="State", options=[])

    def test_options_only_for_dropdown(self):
        with pytest.raises(ValidationError, match="cannot define options"):
            FieldDefinition(name="city", kind=FieldKind.TEXT, label="City", options=["A"])

    def test_options_stored_as_tuple(self):
        field_def = FieldDefinition(
            name="state", kind=FieldKind.DROPDOWN, label="State", options=["Texas", "Ohio"]
        )
        assert field_def.options == ("Texas", "Ohio")
        assert field_def.is_dropdown

    def test_frozen(self):
        field_def = FieldDefinition(name="city", kind=FieldKind.TEXT, label="City")
        with pytest.raises(ValidationError):
            field_def.label = "Town"


class TestValidationRule:
    """Tests for ValidationRule."""

    def test_invalid_regex_rejected(self):
        with pytest.raises(ValidationError, match="Invalid regex"):
            ValidationRule(pattern="[0-9", message="bad")

    def test_matches_respects_anchors(self):
        rule = ValidationRule(pattern="^[0-9]{3,4}$", message="digits")

        assert rule.matches("123")
        assert rule.matches("1234")
        assert not rule.matches("12")
        assert not rule.matches("12345")
        assert not rule.matches("12a")

    def test_unanchored_pattern_searches(self):
        rule = ValidationRule(pattern="[0-9]", message="needs a digit")
        assert rule.matches("abc1")

    def test_end_anchor_rejects_trailing_newline(self):
        rule = ValidationRule(pattern="^[0-9]{3,4}$", message="digits")
        assert not rule.matches("123\n")

    @pytest.mark.parametrize(
        "pattern,value,expected",
        [
            (r"^\$[0-9]+$", "$12", True),
            (r"^\$[0-9]+$", "$12\n", False),
            (r"^[$]+$", "$$", True),
            (r"^[]$]+$", "]$", True),
            (r"^[^$]+$", "ab$", False),
        ],
    )
    def test_literal_dollar_left_alone(self, pattern, value, expected):
        rule = ValidationRule(pattern=pattern, message="m")
        assert rule.matches(value) is expected


class TestAnchorAtStringEnd:
    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("^[0-9]{3}$", r"^[0-9]{3}\Z"),
            ("a$|b$", r"a\Z|b\Z"),
            (r"\$", r"\$"),
            ("[$]", "[$]"),
            ("[]$]$", r"[]$]\Z"),
            ("[^]$]", "[^]$]"),
        ],
    )
    def test_rewrite(self, pattern, expected):
        assert anchor_at_string_end(pattern) == expected


class TestFormSchema:
    """Tests for FormSchema."""

    def test_duplicate_field_names_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate field name"):
            FormSchema(
                form_type="dup",
                fields=[
                    {"name": "a", "type": "text", "label": "A"},
                    {"name": "a", "type": "number", "label": "A again"},
                ],
            )

    def test_field_names_in_order(self):
        schema = FormSchema(
            form_type="t",
            fields=[
                {"name": "b", "type": "text", "label": "B"},
                {"name": "a", "type": "text", "label": "A"},
            ],
        )
        assert schema.field_names == ["b", "a"]
        assert schema.get_field("a").label == "A"
        assert schema.get_field("missing") is None


class TestRecord:
    """Tests for Record immutability."""

    def test_values_are_copied(self):
        values = {"firstName": "Ann"}
        record = Record(form_type="userInfo", values=values)
        values["firstName"] = "Bob"

        assert record.get("firstName") == "Ann"

    def test_values_read_only(self):
        record = Record(form_type="userInfo", values={"firstName": "Ann"})
        with pytest.raises(TypeError):
            record.values["firstName"] = "Bob"

    def test_equality(self):
        a = Record(form_type="userInfo", values={"firstName": "Ann"})
        b = Record(form_type="userInfo", values={"firstName": "Ann"})
        assert a == b
        assert a != Record(form_type="userInfo", values={"firstName": "Bob"})

    def test_hashable(self):
        a = Record(form_type="userInfo", values={"firstName": "Ann", "age": ""})
        b = Record(form_type="userInfo", values={"age": "", "firstName": "Ann"})

        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_to_dict_puts_form_type_first(self):
        record = Record(form_type="userInfo", values={"firstName": "Ann", "age": ""})
        assert list(record.to_dict()) == ["formType", "firstName", "age"]
