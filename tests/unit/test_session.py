"""Tests for the form session state machine."""

import pytest

from dynamic_forms.runtime import CommitAction, FormSession, SessionState
from dynamic_forms.schemas import (
    IndexOutOfRange,
    InvalidSessionState,
    Record,
    UnknownField,
    ValidationFailed,
)


def fill(session: FormSession, **values) -> None:
    for name, value in values.items():
        session.set_field_value(name, value)


class TestSelectFormType:
    """Selection loads a schema with empty values or returns to idle."""

    def test_starts_idle(self, session):
        assert session.state == SessionState.IDLE
        assert session.active_form_type is None
        assert session.values == {}
        assert session.compute_progress() == 0

    @pytest.mark.parametrize("form_type", ["userInfo", "addressInfo", "paymentInfo"])
    def test_progress_zero_after_select(self, session, form_type):
        schema = session.select_form_type(form_type)

        assert session.state == SessionState.EDITING
        assert session.compute_progress() == 0
        assert session.progress == 0
        assert dict(session.values) == {name: "" for name in schema.field_names}

    def test_placeholder_returns_to_idle(self, session):
        session.select_form_type("userInfo")
        session.set_field_value("firstName", "Ann")

        assert session.select_form_type("") is None

        assert session.state == SessionState.IDLE
        assert session.schema is None
        assert session.values == {}
        assert session.progress == 0

    def test_switching_resets_values(self, session):
        session.select_form_type("userInfo")
        session.set_field_value("firstName", "Ann")

        session.select_form_type("paymentInfo")

        assert session.active_form_type == "paymentInfo"
        assert "firstName" not in session.values
        assert session.progress == 0

    def test_reselect_clears_edit_target(self, session):
        session.select_form_type("userInfo")
        session.load_values({"firstName": "Ann"}, edit_target=3)

        session.select_form_type("userInfo")

        assert session.edit_target is None
        assert session.values["firstName"] == ""


class TestSetFieldValue:
    def test_progress_counts_filled_fields(self, session):
        """One of three userInfo fields filled gives a third."""
        session.select_form_type("userInfo")

        progress = session.set_field_value("firstName", "Ann")

        assert progress == pytest.approx(100 / 3)
        assert session.progress == pytest.approx(33.333, abs=1e-3)

    def test_optional_fields_count_too(self, session):
        session.select_form_type("userInfo")
        session.set_field_value("age", "30")
        assert session.progress == pytest.approx(100 / 3)

    def test_clearing_a_value_lowers_progress(self, session):
        session.select_form_type("userInfo")
        fill(session, firstName="Ann", lastName="Lee")
        assert session.progress == pytest.approx(200 / 3)

        session.set_field_value("lastName", "")

        assert session.progress == pytest.approx(100 / 3)

    def test_numeric_zero_counts_as_filled(self, session):
        session.select_form_type("userInfo")
        session.set_field_value("age", 0)
        assert session.progress == pytest.approx(100 / 3)

    def test_all_filled(self, session):
        session.select_form_type("addressInfo")
        fill(session, street="1 Main", city="Austin", state="Texas", zipCode="73301")
        assert session.progress == 100

    def test_unknown_field_rejected(self, session):
        session.select_form_type("userInfo")

        with pytest.raises(UnknownField):
            session.set_field_value("street", "x")

        assert "street" not in session.values

    def test_illegal_when_idle(self, session):
        with pytest.raises(InvalidSessionState):
            session.set_field_value("firstName", "Ann")


class TestCommit:
    def test_appends_and_resets(self, session, store):
        session.select_form_type("userInfo")
        fill(session, firstName="Ann", lastName="Lee")

        result = session.commit(store)

        assert result.action == CommitAction.CREATED
        assert result.index == 0
        assert result.message == "Form submitted successfully!"
        assert store.all() == (
            Record(form_type="userInfo", values={"firstName": "Ann", "lastName": "Lee", "age": ""}),
        )
        assert session.state == SessionState.IDLE
        assert session.values == {}
        assert session.edit_target is None
        assert session.progress == 0

    def test_validation_failure_keeps_values(self, session, store):
        session.select_form_type("paymentInfo")
        fill(session, cardNumber="4111", expiryDate="2027-01", cvv="12", cardholderName="Ann")

        with pytest.raises(ValidationFailed) as exc_info:
            session.commit(store)

        assert exc_info.value.errors == {"cvv": "CVV must be a 3- or 4-digit number."}
        assert session.state == SessionState.EDITING
        assert session.values["cvv"] == "12"
        assert session.progress == 100
        assert len(store) == 0

    def test_second_commit_rejected(self, session, store):
        session.select_form_type("userInfo")
        fill(session, firstName="Ann", lastName="Lee")
        session.commit(store)

        with pytest.raises(InvalidSessionState):
            session.commit(store)

        assert len(store) == 1

    def test_update_at_edit_target(self, session, store, user_record, address_record):
        store.append(user_record)
        store.append(address_record)
        session.select_form_type("userInfo")
        session.load_values(user_record.values, edit_target=0)
        session.set_field_value("firstName", "Zoe")

        result = session.commit(store)

        assert result.action == CommitAction.UPDATED
        assert result.message == "Changes saved successfully."
        assert store.get(0).get("firstName") == "Zoe"
        assert store.get(1) == address_record
        assert len(store) == 2

    def test_stale_edit_target(self, session, store):
        session.select_form_type("userInfo")
        session.load_values({"firstName": "Ann", "lastName": "Lee"}, edit_target=4)

        with pytest.raises(IndexOutOfRange):
            session.commit(store)

        assert session.state == SessionState.EDITING
        assert len(store) == 0


class TestValidate:
    def test_reports_without_committing(self, session):
        session.select_form_type("addressInfo")
        fill(session, street="1 Main", city="Austin", state="Oregon")

        assert session.validate() == {"state": "State must be one of: California, Texas, New York."}
        assert session.state == SessionState.EDITING

    def test_illegal_when_idle(self, session):
        with pytest.raises(InvalidSessionState):
            session.validate()


class TestCancelEdit:
    def test_discards_everything(self, session):
        session.select_form_type("userInfo")
        session.load_values({"firstName": "Ann"}, edit_target=0)

        session.cancel_edit()

        assert session.state == SessionState.IDLE
        assert session.edit_target is None
        assert session.values == {}


class TestIndependentSessions:
    def test_sessions_do_not_share_state(self, registry):
        first = FormSession(registry)
        second = FormSession(registry)

        first.select_form_type("userInfo")
        first.set_field_value("firstName", "Ann")

        assert second.state == SessionState.IDLE
        second.select_form_type("userInfo")
        assert second.values["firstName"] == ""
