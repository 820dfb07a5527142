"""
Response envelope shared by every endpoint.

Success and failure both use ``{status, success, message, data, errors}``;
``message`` is the standard reason phrase of ``status``.
"""

from http import HTTPStatus
from typing import Any, Generic, Optional, TypeVar

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant.application.errors import AppError, InternalError, ValidationError
from shared.core import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ErrorBody(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class Envelope(BaseModel, Generic[T]):
    status: int
    success: bool
    message: str
    data: Optional[T] = None
    errors: Optional[ErrorBody] = None


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown"


def ok(data: Any = None, status_code: int = 200) -> dict:
    return {
        "status": status_code,
        "success": True,
        "message": _phrase(status_code),
        "data": data,
        "errors": None,
    }


def error_response(status_code: int, code: str, message: str, details: Any = None) -> JSONResponse:
    body = {
        "status": status_code,
        "success": False,
        "message": _phrase(status_code),
        "data": None,
        "errors": {"code": code, "message": message, "details": details},
    }
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _validation_details(exc: RequestValidationError) -> list[dict]:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")]
        details.append({"field": ".".join(loc), "message": err.get("msg", ""), "type": err.get("type", "")})
    return details


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.http_status >= 500:
            logger.error(
                f"{exc.code}: {exc.message}",
                exc_info=exc,
                extra={"extra_fields": {"path": request.url.path}},
            )
        else:
            logger.warning(
                f"{exc.code}: {exc.message}",
                extra={"extra_fields": {"path": request.url.path, "status_code": exc.http_status}},
            )
        return error_response(exc.http_status, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = _validation_details(exc)
        logger.warning(
            "Request validation failed",
            extra={"extra_fields": {"path": request.url.path, "errors": details}},
        )
        return error_response(400, ValidationError.code, ValidationError.default_message, details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, _phrase(exc.status_code).upper().replace(" ", "_"), str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            extra={"extra_fields": {"path": request.url.path}},
        )
        return error_response(500, InternalError.code, InternalError.default_message)
