"""
backend/workhive/core/dependencies.py

Authentication and Authorization Dependencies

Provides the Identity & Role Context for FastAPI routes:
- Validates JWT tokens from Bearer header OR HttpOnly cookie
- Checks against blacklisted tokens (logout protection)
- Retrieves the authenticated user freshly from the database
- Reduces the user to an Actor descriptor for the service layer
- Restricts access based on user roles

Pagination Dependency:
- Provides reusable dependency for pagination (skip, limit).
"""

import logging
from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Cookie, Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.auth.schemas import Actor
from workhive.core.blacklist import is_token_blacklisted
from workhive.core.exceptions import ForbiddenError
from workhive.core.security import decode_access_token
from workhive.database.enums import UserRole
from workhive.database.models import User
from workhive.database.session import get_db

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# OAuth2 Configuration
# ---------------------------------------------------
# auto_error=False so a missing header falls through to the cookie check
oauth2_scheme: OAuth2PasswordBearer = OAuth2PasswordBearer(
    tokenUrl="/auth/login/form", auto_error=False
)


# ---------------------------------------------------
# Pagination Dependency
# ---------------------------------------------------
class PaginationParams:
    """
    Dependency that provides pagination parameters from query parameters.
    """

    def __init__(
        self,
        skip: int = Query(0, ge=0, description="Number of records to skip for pagination"),
        limit: int = Query(20, ge=1, le=100, description="Maximum number of records to return"),
    ):
        self.skip = skip
        self.limit = limit


# ---------------------------------------------------
# Authentication Functions
# ---------------------------------------------------
async def get_token(
    token_header: Annotated[str | None, Depends(oauth2_scheme)] = None,
    token_cookie: Annotated[str | None, Cookie(alias="access_token")] = None,
) -> str | None:
    """Bearer header first, then the access_token cookie."""
    return token_header or token_cookie


async def get_current_user(
    token: Annotated[str | None, Depends(get_token)],
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Authenticate the current user based on the provided JWT access token.

    Raises:
        HTTPException: 401 Unauthorized if authentication fails.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if token is None:
        logger.debug("[AUTH] No token found in Authorization header or access_token cookie.")
        raise credentials_exception

    try:
        token_data = decode_access_token(token)
    except JWTError as e:
        logger.warning(f"[AUTH] JWT decoding/validation failed: {e}")
        raise credentials_exception

    if await is_token_blacklisted(token_data.jti):
        logger.warning(f"[AUTH] Blacklisted token detected: jti={token_data.jti}")
        raise credentials_exception

    user = await db.get(User, token_data.sub, populate_existing=True)
    if not user:
        logger.warning(f"[AUTH] JWT valid but no matching user found: user_id={token_data.sub}")
        raise credentials_exception

    if not user.is_active:
        logger.warning(f"[AUTH] Authentication attempt by inactive user: {user.id}")
        raise credentials_exception

    logger.debug(f"[AUTH] User {user.id} authenticated successfully.")
    return user


async def get_current_actor(user: Annotated[User, Depends(get_current_user)]) -> Actor:
    """Identity descriptor consumed by the service layer."""
    return Actor.model_validate(user)


# ---------------------------------------------------
# Authorization Functions (Role-Based)
# ---------------------------------------------------
def require_roles(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, Actor]]:
    """
    Dependency to restrict access to actors having any of the specified roles.
    """

    async def checker(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            logger.warning(
                f"[RBAC] Access denied: User {actor.id} with role {actor.role.value} attempted access "
                f"(allowed roles: {[r.value for r in roles]})"
            )
            raise ForbiddenError(f"Access denied for role: {actor.role.value}")
        return actor

    return checker


# ---------------------------------------------------
# Annotated shortcuts used by the routers
# ---------------------------------------------------
DBDep = Annotated[AsyncSession, Depends(get_db)]
ActorDep = Annotated[Actor, Depends(get_current_actor)]
ClientDep = Annotated[Actor, Depends(require_roles(UserRole.CLIENT))]
WorkerDep = Annotated[Actor, Depends(require_roles(UserRole.WORKER))]
AdminDep = Annotated[Actor, Depends(require_roles(UserRole.ADMIN))]
