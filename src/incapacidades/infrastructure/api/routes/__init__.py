"""API Routes for the Incapacidades API."""

from incapacidades.infrastructure.api.routes.auth_router import router as auth_router
from incapacidades.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "auth_router",
    "users_router",
]
