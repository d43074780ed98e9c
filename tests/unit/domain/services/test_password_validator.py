"""Unit tests for password and national ID validation."""

import pytest

from incapacidades.domain.services import (
    PasswordValidator,
    default_password_validator,
    is_valid_national_id,
)


class TestPasswordValidator:
    def test_valid_password(self):
        assert default_password_validator.validate("Password123") == []
        assert default_password_validator.is_valid("Password123")

    @pytest.mark.parametrize(
        ("password", "code"),
        [
            ("Pass12", "password_too_short"),
            ("password123", "password_no_uppercase"),
            ("PASSWORD123", "password_no_lowercase"),
            ("PasswordABC", "password_no_digit"),
        ],
    )
    def test_each_rule(self, password, code):
        codes = [e.code for e in default_password_validator.validate(password)]
        assert code in codes

    def test_reports_every_failure(self):
        errors = default_password_validator.validate("abc")
        assert {e.code for e in errors} == {
            "password_too_short",
            "password_no_uppercase",
            "password_no_digit",
        }
        assert all(e.field == "password" for e in errors)

    def test_special_character_optional_by_default(self):
        assert default_password_validator.is_valid("Password123")

    def test_special_character_required(self):
        validator = PasswordValidator(require_special=True)

        assert not validator.is_valid("Password123")
        assert validator.is_valid("Password123!")


class TestNationalId:
    @pytest.mark.parametrize("value", ["123456", "1000000001", "98765432"])
    def test_valid(self, value):
        assert is_valid_national_id(value)

    @pytest.mark.parametrize("value", ["12345", "12345678901", "12a456", "", "١٢٣٤٥٦"])
    def test_invalid(self, value):
        assert not is_valid_national_id(value)
