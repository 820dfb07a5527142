"""
Application error taxonomy.

Services raise these; the API layer turns them into the response envelope
using ``http_status`` and ``code``.
"""

from typing import Any, Optional


class AppError(Exception):
    http_status = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    http_status = 400
    code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class BadRequestError(AppError):
    http_status = 400
    code = "BAD_REQUEST"
    default_message = "Bad request"


class UnauthorizedError(AppError):
    http_status = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    http_status = 403
    code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(AppError):
    http_status = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(AppError):
    http_status = 409
    code = "CONFLICT"
    default_message = "Conflict"


class InternalError(AppError):
    pass
