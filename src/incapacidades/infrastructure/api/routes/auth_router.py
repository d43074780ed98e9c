"""Authentication API routes.

Provides endpoints for registration, login, token refresh, and logout.
"""

from fastapi import APIRouter, Response, status

from incapacidades.core.logging import get_logger
from incapacidades.domain.services import AuthResult
from incapacidades.infrastructure.api.dependencies import AuthServiceDep, ValidatedUser
from incapacidades.infrastructure.api.schemas import (
    AuthResponse,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

logger = get_logger(__name__)

router = APIRouter()


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(result.user),
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
        expires_in=result.tokens.expires_in,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        409: {"description": "Email or national ID already registered"},
        422: {"description": "Validation error"},
    },
)
async def register(request: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Register a new user with the USER role and return a token pair."""
    result = await auth_service.register(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        national_id=request.national_id,
        phone=request.phone,
    )
    return _auth_response(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(user: ValidatedUser, auth_service: AuthServiceDep) -> AuthResponse:
    """Authenticate with email and password.

    Unknown email, wrong password, and inactive account all produce the
    same 401 response.
    """
    result = await auth_service.login(user)
    return _auth_response(result)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={401: {"description": "Invalid refresh token"}},
)
async def refresh(request: RefreshTokenRequest, auth_service: AuthServiceDep) -> TokenResponse:
    """Exchange a refresh token for a new token pair.

    The presented refresh token is consumed and cannot be used again.
    """
    tokens = await auth_service.refresh(request.refresh_token)
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: RefreshTokenRequest, auth_service: AuthServiceDep) -> Response:
    """Revoke a refresh token. Always succeeds."""
    await auth_service.logout(request.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
