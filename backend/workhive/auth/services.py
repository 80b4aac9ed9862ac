"""
auth/services.py

Business logic for authentication:
- User registration (client or worker)
- Login with email/password via JSON or OAuth2 form
- Logout by blacklisting the token's JTI until it expires
"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from jose import JWTError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.auth.schemas import (
    AuthSuccessResponse,
    AuthUserResponse,
    LoginRequest,
    SignupRequest,
)
from workhive.core.blacklist import blacklist_token
from workhive.core.exceptions import ConflictError
from workhive.core.schemas import MessageResponse
from workhive.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from workhive.database.models import User
from workhive.database.session import atomic

logger = logging.getLogger(__name__)


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid email or password",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _get_user_by_email(email: str, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


# ------------------------------------------------
# Signup
# ------------------------------------------------
async def signup_user(payload: SignupRequest, db: AsyncSession) -> AuthUserResponse:
    """Registers a new client or worker account."""
    email = payload.email.lower()
    if await _get_user_by_email(email, db):
        logger.info(f"[AUTH] Signup attempt with existing email: {email}")
        raise ConflictError("Email already registered.")

    async with atomic(db):
        user = User(
            email=email,
            hashed_password=get_password_hash(payload.password),
            role=payload.role,
            name=payload.name,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError("Email already registered.")

    logger.info(f"[AUTH] New user registered: {user.id} ({user.role.value})")
    return AuthUserResponse.model_validate(user)


# ------------------------------------------------
# Login
# ------------------------------------------------
async def _authenticate_user(email: str, password: str, db: AsyncSession) -> User:
    user = await _get_user_by_email(email, db)
    if not user or not verify_password(password, user.hashed_password):
        logger.warning(f"[AUTH] Failed login attempt for {email}")
        raise _invalid_credentials()
    if not user.is_active:
        logger.warning(f"[AUTH] Login attempt by inactive user: {user.id}")
        raise _invalid_credentials()
    return user


def _issue_token(user: User) -> AuthSuccessResponse:
    access_token = create_access_token(
        {"sub": str(user.id), "email": user.email, "role": user.role.value}
    )
    return AuthSuccessResponse(access_token=access_token, user=AuthUserResponse.model_validate(user))


async def login_user_json(payload: LoginRequest, db: AsyncSession) -> AuthSuccessResponse:
    """Authenticates a user via JSON email/password."""
    user = await _authenticate_user(payload.email, payload.password, db)
    logger.info(f"[AUTH] User logged in: {user.id}")
    return _issue_token(user)


async def login_user_form(username: str, password: str, db: AsyncSession) -> AuthSuccessResponse:
    """Authenticates a user via OAuth2 form data (username is the email)."""
    user = await _authenticate_user(username, password, db)
    logger.info(f"[AUTH] User logged in (form): {user.id}")
    return _issue_token(user)


# ------------------------------------------------
# Logout
# ------------------------------------------------
async def logout_user_token(token: str) -> MessageResponse:
    """Blacklists the provided JWT access token for the rest of its lifetime."""
    try:
        payload = decode_access_token(token)
    except JWTError as e:
        logger.warning(f"[AUTH] Logout with invalid token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expires_in = payload.exp - int(datetime.now(timezone.utc).timestamp())
    await blacklist_token(payload.jti, expires_in)
    logger.info(f"[AUTH] User {payload.sub} logged out: jti={payload.jti}")
    return MessageResponse(detail="Successfully logged out")
