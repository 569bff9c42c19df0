"""
Rate limiting utilities for API endpoints.
Uses slowapi to slow down brute force attempts on the credential endpoints.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from portfolio_api.config import settings


def get_client_identifier(request: Request) -> str:
    """
    Get client identifier for rate limiting.
    Uses forwarded IP if behind proxy, otherwise remote address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First IP in the chain is the original client
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    enabled=settings.RATE_LIMIT_ENABLED,
    storage_uri="memory://"  # In-memory storage (per process)
)


RATE_LIMITS = {
    "login": "5/minute",  # 5 login attempts per minute per IP
    "reset": "5/minute",
}
