"""
JWT Token-based authentication utilities for CMS access.
Provides token generation, verification and the bearer-token dependency.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional
import logging

from jose import ExpiredSignatureError, JWTError, jwt
from fastapi import HTTPException, status, Header

from portfolio_api.config import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class TokenStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of checking a bearer token."""
    status: TokenStatus
    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary of claims to include in token
        expires_delta: Optional custom expiration time (defaults to JWT_EXPIRES_IN)

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    to_encode.update({
        "exp": now + (expires_delta if expires_delta is not None else settings.JWT_EXPIRES_IN),
        "iat": now,
        "type": "access"
    })

    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_token(token: Optional[str], secret: Optional[str] = None) -> TokenVerification:
    """
    Verify a JWT token signature, expiry and type.

    Never raises: the outcome is reported through TokenVerification.status so
    callers can tell an expired token from a forged or malformed one.
    """
    if not token:
        return TokenVerification(TokenStatus.INVALID)

    try:
        payload = jwt.decode(token, secret or settings.JWT_SECRET, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        return TokenVerification(TokenStatus.EXPIRED)
    except JWTError:
        return TokenVerification(TokenStatus.INVALID)

    if payload.get("type") != "access":
        return TokenVerification(TokenStatus.INVALID)

    return TokenVerification(TokenStatus.VALID, payload)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token part of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def require_bearer_token(
    authorization: Optional[str] = Header(None, description="Bearer token for authentication")
) -> dict:
    """
    FastAPI dependency guarding every mutating content endpoint.

    Attach it through the route decorator's ``dependencies`` so it resolves
    before the database session is opened.

    Returns:
        dict: Decoded token claims

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Unauthorized", "message": "Authentication required"},
            headers={"WWW-Authenticate": "Bearer"}
        )

    result = decode_token(token)
    if result.status is TokenStatus.EXPIRED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Token expired", "message": "Please login again"},
            headers={"WWW-Authenticate": "Bearer"}
        )
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid token", "message": "Authentication token is invalid or expired"},
            headers={"WWW-Authenticate": "Bearer"}
        )

    return result.claims
