"""
core/exceptions.py

Description:
Defines the error taxonomy shared by every service and the standard
error response format for the API.

- ValidationError: malformed or missing input (422)
- NotFoundError: referenced entity absent (404)
- ForbiddenError: authorization guard failed (403)
- ConflictError: state guard failed, caller may re-read and retry (409)
- InternalError: unexpected store failure, detail is always opaque (500)
"""

from typing import Any

from fastapi import HTTPException, status


class APIError(HTTPException):
    """Base exception with a standardized `{"detail": message}` response."""

    status_code_default: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        headers: dict[str, Any] | None = None,
    ):
        super().__init__(
            status_code=status_code or self.status_code_default,
            detail=message,
            headers=headers,
        )


class ValidationError(APIError):
    status_code_default = 422


class NotFoundError(APIError):
    status_code_default = status.HTTP_404_NOT_FOUND


class ForbiddenError(APIError):
    status_code_default = status.HTTP_403_FORBIDDEN


class ConflictError(APIError):
    status_code_default = status.HTTP_409_CONFLICT


class InternalError(APIError):
    """Never carries internal detail to the caller."""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self) -> None:
        super().__init__("Internal server error")
