"""Unit tests for registration form parsing.

Every rejection must come back as Failure(ValidationError) with a specific
error code, before anything touches the store.
"""

import pytest

from identity_service.application.commands import RegisterAccount, parse_registration
from identity_service.core.enums import ErrorCode
from identity_service.core.errors import ValidationError
from identity_service.core.result import Failure, Success


def registration_form(**overrides) -> dict:
    form = {
        "email": "Alice@X.com",
        "password": "password123",
        "confirm_password": "password123",
        "first_name": "Alice",
        "last_name": "Liddell",
        "agree_to_terms": True,
    }
    form.update(overrides)
    return form


@pytest.mark.unit
class TestParseRegistrationSuccess:
    def test_valid_form_produces_command(self):
        result = parse_registration(registration_form())

        assert isinstance(result, Success)
        assert result.value == RegisterAccount(
            email="alice@x.com",
            password="password123",
            first_name="Alice",
            last_name="Liddell",
            username=None,
        )

    def test_username_is_normalized(self):
        result = parse_registration(registration_form(username="  Alice_L "))

        assert isinstance(result, Success)
        assert result.value.username == "alice_l"

    def test_names_are_stripped(self):
        result = parse_registration(registration_form(first_name="  Alice  "))

        assert isinstance(result, Success)
        assert result.value.first_name == "Alice"


@pytest.mark.unit
class TestParseRegistrationFailure:
    @pytest.mark.parametrize(
        ("overrides", "code", "field"),
        [
            ({"email": "not-an-email"}, ErrorCode.INVALID_EMAIL, "email"),
            (
                {"password": "short12", "confirm_password": "short12"},
                ErrorCode.INVALID_PASSWORD,
                "password",
            ),
            ({"username": "bad name"}, ErrorCode.INVALID_USERNAME, "username"),
            ({"first_name": "   "}, ErrorCode.VALIDATION_FAILED, "first_name"),
            ({"last_name": "L" * 101}, ErrorCode.VALIDATION_FAILED, "last_name"),
        ],
    )
    def test_field_errors(self, overrides, code, field):
        result = parse_registration(registration_form(**overrides))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code == code
        assert result.error.field == field

    def test_password_mismatch(self):
        result = parse_registration(registration_form(confirm_password="password124"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.PASSWORD_MISMATCH
        assert result.error.field is None
        assert result.error.message == "Passwords do not match"

    def test_terms_not_accepted(self):
        result = parse_registration(registration_form(agree_to_terms=False))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TERMS_NOT_ACCEPTED
        assert result.error.message == "Terms and conditions must be accepted"

    def test_missing_field(self):
        form = registration_form()
        del form["last_name"]

        result = parse_registration(form)

        assert isinstance(result, Failure)
        assert result.error.field == "last_name"

    def test_message_has_no_pydantic_prefix(self):
        result = parse_registration(
            registration_form(password="short12", confirm_password="short12")
        )

        assert isinstance(result, Failure)
        assert result.error.message == "Password must be at least 8 characters long"
