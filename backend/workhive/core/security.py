"""
core/security.py

Password hashing and JWT access token handling:
- bcrypt password hashing and verification (passlib)
- Access token creation with expiration and unique JTI (python-jose)
- Access token decoding into a validated TokenPayload
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, cast

from jose import JWTError, jwt
from passlib.context import CryptContext

from workhive.auth.schemas import TokenPayload
from workhive.core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ------------------------------------------------------
# --- Passwords ---
# ------------------------------------------------------
def get_password_hash(password: str) -> str:
    """Hashes a plain text password."""
    return cast(str, pwd_context.hash(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifies a plain text password against a hash."""
    return cast(bool, pwd_context.verify(plain_password, hashed_password))


# ------------------------------------------------------
# --- Access Token ---
# ------------------------------------------------------
def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token with expiration and unique JTI.

    Args:
        data (dict[str, Any]): Payload data; must contain 'sub', 'email' and 'role'.
        expires_delta (timedelta | None): Optional custom lifetime. Defaults to settings.

    Returns:
        str: Encoded JWT access token.
    """
    missing = {"sub", "email", "role"} - data.keys()
    if missing:
        logger.error(f"Access token creation attempt missing claims: {sorted(missing)}")
        raise ValueError("Access token payload must include 'sub', 'email' and 'role'.")

    expire: datetime = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    jti: str = str(uuid.uuid4())  # Unique token identifier for blacklisting
    payload: dict[str, Any] = {**data, "sub": str(data["sub"]), "exp": expire, "jti": jti}

    logger.info(f"Issuing access token for sub={data['sub']} exp={expire} jti={jti}")
    return str(jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM))


def decode_access_token(token: str) -> TokenPayload:
    """
    Decode and validate an access token.

    Raises:
        JWTError: If the signature, expiry or claims are invalid.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return TokenPayload(**payload)
    except ValueError as e:
        raise JWTError(f"Invalid token claims: {e}") from e
