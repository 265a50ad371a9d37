"""
Custom exception hierarchy for the Job Board API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Sequence, Union

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)

Messages = Union[str, Sequence[str]]


class ErrorKind(str, enum.Enum):
    """The three categories a failed validation gate can raise."""
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"

    @classmethod
    def for_message(cls, message: str) -> "ErrorKind":
        """Default kind for an untagged failure, inferred from its text."""
        if message.startswith("No job"):
            return cls.NOT_FOUND
        if message.startswith("Not authorized"):
            return cls.UNAUTHORIZED
        return cls.BAD_REQUEST


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class JobBoardException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class GateError(JobBoardException):
    """
    An error that carries one or more validation messages.

    `messages` keeps the list in the order the failures were produced;
    `message` is the comma-joined rendering of it.
    """
    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(self, messages: Messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages: list[str] = list(messages)
        super().__init__(
            message=", ".join(self.messages),
            details={"errors": self.messages},
        )


class BadRequestError(GateError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"
    kind = ErrorKind.BAD_REQUEST


class UnauthorizedError(GateError):
    """Requester is known but may not touch the resource."""
    http_status = status.HTTP_403_FORBIDDEN
    code = "UNAUTHORIZED"
    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(GateError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    kind = ErrorKind.NOT_FOUND


class UnauthenticatedError(JobBoardException):
    """No (valid) session, or wrong credentials at login."""
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "authentication invalid"):
        super().__init__(message=message)


ERROR_FOR_KIND: dict[ErrorKind, type[GateError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.UNAUTHORIZED: UnauthorizedError,
    ErrorKind.BAD_REQUEST: BadRequestError,
}


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def job_board_exception_handler(request: Request, exc: JobBoardException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
