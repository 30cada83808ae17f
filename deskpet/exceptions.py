"""Error taxonomy of the DeskPet API and its conversion to JSON responses.

Services raise these exceptions; the handlers registered in ``deskpet.main``
turn them into ``{"detail": ..., "code": ...}`` bodies at the request boundary.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class DeskPetException(Exception):
    """Base exception for the DeskPet API."""

    def __init__(
        self,
        message: str,
        code: str = "DESKPET_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(DeskPetException):
    """Malformed or missing input."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR", status_code=status.HTTP_400_BAD_REQUEST)


class ConflictError(DeskPetException):
    """The resource already exists."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT", status_code=status.HTTP_400_BAD_REQUEST)


class AuthError(DeskPetException):
    """Missing, invalid or expired token, or bad login credentials."""

    def __init__(self, message: str):
        super().__init__(message, code="AUTH_ERROR", status_code=status.HTTP_401_UNAUTHORIZED)


class NotFoundError(DeskPetException):
    """The account behind a valid token no longer exists."""

    def __init__(self, message: str = "Account not found"):
        super().__init__(message, code="NOT_FOUND", status_code=status.HTTP_404_NOT_FOUND)


class PolicyError(DeskPetException):
    """A level was claimed before it was reached."""

    def __init__(self, requested_level: int, current_level: int):
        super().__init__(
            f"Level {requested_level} is locked (current level is {current_level})",
            code="LEVEL_LOCKED",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
        self.requested_level = requested_level
        self.current_level = current_level


class InternalError(DeskPetException):
    """Storage failure. The client only ever sees the generic message."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def deskpet_exception_handler(request: Request, exc: DeskPetException) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema failures on request bodies are reported as 400, like any other bad input."""
    missing = [".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()]
    logging.info(f"Rejected request body on {request.url.path}: {missing}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body", "code": "VALIDATION_ERROR", "fields": missing},
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logging.exception(f"Unexpected error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )
