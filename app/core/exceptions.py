"""
Error taxonomy for Employee Records Service.

All service errors derive from EmployeeServiceError and carry the HTTP
status and error kind used when they are translated into a response.
"""

from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.logging import get_logger

logger = get_logger(__name__)


class EmployeeServiceError(Exception):
    """Base class for all business errors raised by the service layer."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(EmployeeServiceError):
    """Missing or malformed required field."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "invalid_input"


class EmployeeNotFoundError(EmployeeServiceError):
    """No employee exists with the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    kind = "employee_not_found"

    def __init__(self, employee_id: str):
        super().__init__(f"Employee with id {employee_id} not found")
        self.employee_id = employee_id


class DuplicateEmployeeError(EmployeeServiceError):
    """Another employee already uses the given email."""

    status_code = status.HTTP_409_CONFLICT
    kind = "duplicate_employee"

    def __init__(self, email: str):
        super().__init__(f"Employee with email {email} already exists")
        self.email = email


class ErrorResponse(BaseModel):
    """Standardized error response format."""

    error: str
    detail: str
    timestamp: str
    path: str
    errors: list[dict] | None = None


def _error_response(
    request: Request,
    status_code: int,
    kind: str,
    detail: str,
    errors: list[dict] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=kind,
        detail=detail,
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(exclude_none=True)),
    )


async def employee_service_error_handler(
    request: Request, exc: EmployeeServiceError
) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.kind, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Rejected request to {request.url.path}: {len(exc.errors())} validation error(s)")
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        InvalidInputError.kind,
        "Request validation failed",
        errors=errors,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error translation handlers to the application."""
    app.add_exception_handler(EmployeeServiceError, employee_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
