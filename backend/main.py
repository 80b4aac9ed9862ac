"""
main.py

Application entrypoint for the Workhive API.
- Initializes structured logging
- Owns the database lifecycle (created at startup, disposed at shutdown)
- Sets up FastAPI application and middlewares
- Registers all API routers
- Adds common security headers
- Configures CORS
- Converts unexpected exceptions into an opaque 500 response
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from workhive.admin.routes import router as admin_router
from workhive.application.routes import router as application_router
from workhive.auth.routes import router as auth_router
from workhive.core.config import settings
from workhive.core.logging import init_logging
from workhive.database.session import Database
from workhive.invoice.routes import router as invoice_router
from workhive.job.routes import router as job_router
from workhive.users.routes import router as users_router

init_logging()
logger = logging.getLogger(__name__)


# -----------------------------
# Lifespan (DB engine lifecycle)
# -----------------------------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    database = Database(settings.db_url, echo=settings.DEBUG)
    if settings.DB_CREATE_ALL:
        await database.create_all()
    app.state.database = database
    logger.info(f"[STARTUP] {settings.APP_NAME} started")
    try:
        yield
    finally:
        await database.dispose()
        logger.info(f"[SHUTDOWN] {settings.APP_NAME} stopped")


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


# -----------------------------
# Security Headers Middleware
# -----------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add common security headers to responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# -----------------------------
# CORSMiddleware Configuration
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------
# Unexpected Errors
# -----------------------------
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"[ERROR] Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# -----------------------------
# API Router Registration
# -----------------------------
app.include_router(admin_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(job_router)
app.include_router(application_router)
app.include_router(invoice_router)


# -----------------------------
# Root Endpoint
# -----------------------------
@app.get("/")
async def home() -> Any:
    return {"message": f"Welcome to {settings.APP_NAME}"}
