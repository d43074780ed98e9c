"""Password and national ID validation.

Boundary contracts applied before registration:
- Passwords: minimum 8 characters with an uppercase letter, a lowercase
  letter, and a digit.
- National IDs ("cedula"): 6 to 10 digits.
"""

import re
from dataclasses import dataclass

NATIONAL_ID_PATTERN = re.compile(r"^\d{6,10}$", re.ASCII)


@dataclass(frozen=True)
class PasswordValidationError:
    """Represents a password validation error.

    Attributes:
        field: The field name (always 'password').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class PasswordValidator:
    """Validates password strength."""

    SPECIAL_CHARS = r"!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>\/?`~"

    def __init__(
        self,
        min_length: int = 8,
        require_uppercase: bool = True,
        require_lowercase: bool = True,
        require_digit: bool = True,
        require_special: bool = False,
    ) -> None:
        self.min_length = min_length
        self.require_uppercase = require_uppercase
        self.require_lowercase = require_lowercase
        self.require_digit = require_digit
        self.require_special = require_special

    def validate(self, password: str) -> list[PasswordValidationError]:
        """Validate a password against the policy.

        Args:
            password: The password to validate.

        Returns:
            List of validation errors. Empty list if password is valid.
        """
        errors: list[PasswordValidationError] = []

        if len(password) < self.min_length:
            errors.append(
                PasswordValidationError(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )

        if self.require_uppercase and not re.search(r"[A-Z]", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one uppercase letter",
                    code="password_no_uppercase",
                )
            )

        if self.require_lowercase and not re.search(r"[a-z]", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one lowercase letter",
                    code="password_no_lowercase",
                )
            )

        if self.require_digit and not re.search(r"\d", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one digit",
                    code="password_no_digit",
                )
            )

        if self.require_special and not re.search(f"[{self.SPECIAL_CHARS}]", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one special character",
                    code="password_no_special",
                )
            )

        return errors

    def is_valid(self, password: str) -> bool:
        """Check if a password is valid."""
        return len(self.validate(password)) == 0


def is_valid_national_id(value: str) -> bool:
    """Check that a national ID is 6 to 10 digits."""
    return bool(NATIONAL_ID_PATTERN.fullmatch(value))


default_password_validator = PasswordValidator()
