from __future__ import annotations

import logging
from typing import Any, Mapping

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ActionError(Exception):
    """A form action that could not be completed.

    ``echo`` carries the submitted form fields (wire names) so the page can
    re-populate the form next to the error message.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, echo: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.echo: dict[str, Any] = dict(echo or {})

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        for key, value in self.echo.items():
            if key != "error":
                body[key] = value
        return body


class ValidationError(ActionError):
    """Caller-supplied input failed a precondition; nothing was written."""

    status_code = status.HTTP_400_BAD_REQUEST


class PersistenceError(ActionError):
    """The storage layer rejected the write or could not be reached."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
    logger.info(
        "action.failed",
        extra={
            "extra_data": {
                "path": request.url.path,
                "status": exc.status_code,
                "error": exc.message,
            }
        },
    )
    return JSONResponse(exc.payload(), status_code=exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> ErrorEnvelope:
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Error"
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(status_code=exc.status_code, code="http_error", message=message, details=details)


async def validation_exception_handler(request: Request, exc):  # type: ignore[override]
    from fastapi.exceptions import RequestValidationError

    if isinstance(exc, RequestValidationError):
        return ErrorEnvelope(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": exc.errors()},
        )
    raise exc


__all__ = [
    "ActionError",
    "ErrorEnvelope",
    "PersistenceError",
    "ValidationError",
    "action_error_handler",
    "http_exception_handler",
    "validation_exception_handler",
]
