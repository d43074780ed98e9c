"""HTTP middleware package."""

from incapacidades.infrastructure.api.middleware.correlation_id_middleware import (
    CORRELATION_ID_HEADER,
    CorrelationIdMiddleware,
)

__all__ = [
    "CORRELATION_ID_HEADER",
    "CorrelationIdMiddleware",
]
