"""Domain services for the Incapacidades API.

Services hold the business rules for authentication and user management.
"""

from incapacidades.domain.services.password_validator import (
    NATIONAL_ID_PATTERN,
    PasswordValidationError,
    PasswordValidator,
    default_password_validator,
    is_valid_national_id,
)
from incapacidades.domain.services.auth_service import (
    AuthResult,
    AuthService,
    build_auth_service,
)
from incapacidades.domain.services.user_service import Page, UserService, UserUpdate
from incapacidades.domain.services.admin_bootstrap import (
    AdminBootstrapError,
    ensure_default_admin,
)

__all__ = [
    "AdminBootstrapError",
    "AuthResult",
    "AuthService",
    "NATIONAL_ID_PATTERN",
    "Page",
    "PasswordValidationError",
    "PasswordValidator",
    "UserService",
    "UserUpdate",
    "build_auth_service",
    "default_password_validator",
    "ensure_default_admin",
    "is_valid_national_id",
]
