"""
Authentication routes: login, password reset and token verification.
Credentials are checked with bcrypt against users.password_hash; successful
logins receive a signed bearer token.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Form, Request
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from portfolio_api.database import get_db
from portfolio_api.models import User
from portfolio_api.schemas import LoginResponse, PasswordResetResponse, TokenValidResponse, UserResponse
from portfolio_api.utils.auth import MAX_PASSWORD_BYTES, hash_password, password_too_long, verify_password
from portfolio_api.utils.jwt_auth import TokenStatus, create_access_token, decode_token
from portfolio_api.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def authenticate_user(db: AsyncSession, username: str, password: str) -> Optional[User]:
    """
    Look up a user and check the password.

    Returns:
        User if the credentials match, None otherwise
    """
    result = await db.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "Invalid credentials.", "message": "Incorrect username or password"}
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    """
    Log in with username and password.

    Returns:
        LoginResponse: Bearer token plus the user record

    Raises:
        HTTPException: 401 if the credentials are wrong, 500 on store failure
    """
    try:
        user = await authenticate_user(db, username, password)
    except Exception as e:
        logger.error(f"Login failed for '{username}': {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Login failed", "message": "An unexpected error occurred"}
        )

    if user is None:
        logger.warning(f"Invalid login attempt for '{username}'")
        raise _invalid_credentials()

    token = create_access_token({"sub": str(user.id), "userId": user.id, "email": user.email})
    logger.info(f"User '{username}' logged in")

    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/reset", response_model=PasswordResetResponse)
@limiter.limit(RATE_LIMITS["reset"])
async def reset_password(
    request: Request,
    username: str = Form(...),
    old_password: str = Form(..., alias="oldPassword"),
    password: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    """
    Change a user's password after checking the current one.

    Raises:
        HTTPException: 401 if username/old password do not match, 500 on store failure
    """
    if not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid password", "message": "New password must not be empty"}
        )
    if password_too_long(password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid password",
                "message": f"New password must be at most {MAX_PASSWORD_BYTES} bytes"
            }
        )

    try:
        user = await authenticate_user(db, username, old_password)
        if user is None:
            raise _invalid_credentials()

        await db.execute(
            update(User)
            .where(User.id == user.id)
            .values(password_hash=hash_password(password))
        )
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Password reset failed for '{username}': {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Password reset failed", "message": "An unexpected error occurred"}
        )

    logger.info(f"Password updated for '{username}'")
    return PasswordResetResponse(
        message="Password updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/verify_token", response_model=TokenValidResponse)
async def verify_token(token: Optional[str] = Form(None)):
    """
    Check whether a token is still valid.

    Raises:
        HTTPException: 401 with error "Token expired" or "Invalid token"
    """
    result = decode_token(token)

    if result.status is TokenStatus.EXPIRED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Token expired", "message": "Please login again"}
        )
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid token", "message": "Token verification failed"}
        )

    return TokenValidResponse(message="Token is valid!", claims=result.claims)
