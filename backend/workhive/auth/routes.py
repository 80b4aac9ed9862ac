"""
auth/routes.py

Handles authentication routes including:
- User registration
- Login via JSON or OAuth2 form (token in body and HttpOnly cookie)
- Logout (token blacklisting)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from workhive.auth.schemas import AuthSuccessResponse, AuthUserResponse, LoginRequest, SignupRequest
from workhive.auth.services import login_user_form, login_user_json, logout_user_token, signup_user
from workhive.core.config import settings
from workhive.core.dependencies import DBDep, get_token
from workhive.core.schemas import MessageResponse

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )


# ---------------------------------------------------
# Registration
# ---------------------------------------------------
@router.post(
    "/signup",
    response_model=AuthUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register New User",
    description="Registers a new client or worker account.",
)
async def signup(payload: SignupRequest, db: DBDep) -> AuthUserResponse:
    return await signup_user(payload, db)


# ---------------------------------------------------
# Login (JSON)
# ---------------------------------------------------
@router.post(
    "/login",
    response_model=AuthSuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with JSON",
    description="Authenticates user via JSON. Returns the access token and sets it in an HttpOnly cookie.",
)
async def login(payload: LoginRequest, response: Response, db: DBDep) -> AuthSuccessResponse:
    result = await login_user_json(payload, db)
    _set_auth_cookie(response, result.access_token)
    return result


# ---------------------------------------------------
# Login (OAuth2 Form)
# ---------------------------------------------------
@router.post(
    "/login/form",
    response_model=AuthSuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with OAuth2 Form",
    description="Authenticates user via form data (username = email). Used by the OpenAPI docs.",
)
async def login_form(
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DBDep,
) -> AuthSuccessResponse:
    result = await login_user_form(form_data.username, form_data.password, db)
    _set_auth_cookie(response, result.access_token)
    return result


# ---------------------------------------------------
# Logout
# ---------------------------------------------------
@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout User",
    description="Blacklists the current JWT access token (header or cookie) and clears the cookie.",
)
async def logout(
    response: Response,
    token: Annotated[str | None, Depends(get_token)],
) -> MessageResponse:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    result = await logout_user_token(token)
    response.delete_cookie("access_token", path="/")
    return result
