"""Authorization and scoping errors.

Raised where they are detected and rendered by the handler registered in
``create_app``; nothing in the service layer catches them.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base error for task manager operations."""

    status_code = 500

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class Unauthenticated(AppError):
    """No principal, or the credentials did not check out."""

    status_code = 401

    def __init__(self, message: str = "unauthenticated"):
        super().__init__(message, "UNAUTHENTICATED")


class Forbidden(AppError):
    """Authenticated, but missing a permission or outside the organization."""

    status_code = 403

    def __init__(self, message: str = "forbidden"):
        super().__init__(message, "FORBIDDEN")


class InvalidState(AppError):
    """Missing organization, missing referenced record, or bad assignee."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, "INVALID_STATE")


class NotFound(AppError):
    """Referenced record does not exist."""

    status_code = 404

    def __init__(self, message: str = "not found"):
        super().__init__(message, "NOT_FOUND")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
