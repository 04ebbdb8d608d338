from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


logger = logging.getLogger(__name__)


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class AppError(Exception):
    def __init__(self, code: str, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code


class BadRequestError(AppError):
    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(code="bad_request", message=message, status_code=400)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(code="forbidden", message=message, status_code=403)


class DataSourceError(AppError):
    """The booking data source could not be queried.

    ``detail`` carries the underlying failure for server-side logs only; the
    client sees the generic ``message``.
    """

    def __init__(self, detail: str, message: str = "Failed to fetch analytics data") -> None:
        super().__init__(code="data_source_error", message=message, status_code=502)
        self.detail = detail


class ComputationError(AppError):
    def __init__(self, message: str = "Analytics computation failed") -> None:
        super().__init__(code="computation_error", message=message, status_code=500)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    envelope = ErrorEnvelope(error=ErrorDetail(code=exc.code, message=exc.message))
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump())


def data_source_error_handler(request: Request, exc: DataSourceError) -> JSONResponse:
    logger.error("Data source failure on %s: %s", request.url.path, exc.detail)
    return app_error_handler(request, exc)


def computation_error_handler(request: Request, exc: ComputationError) -> JSONResponse:
    logger.error("Computation failure on %s: %s", request.url.path, exc.message)
    return app_error_handler(request, exc)


def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorDetail(
            code="validation_error",
            message="Validation error",
            details={"errors": exc.errors()},
        )
    )
    return JSONResponse(status_code=422, content=envelope.model_dump())
