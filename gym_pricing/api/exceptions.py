"""
API exception handlers
Every error leaves the API as {"success": false, "error": ..., "message": ...}.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BusinessException(Exception):
    """Expected business error with an HTTP status"""

    def __init__(self, error: str, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code


def error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    body = {"success": False, "error": error, "message": message}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


async def business_exception_handler(request: Request, exc: BusinessException):
    """Business errors"""
    logger.info(f"Business error on {request.url.path}: {exc.error}")
    return error_response(exc.status_code, exc.error, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body/query validation errors"""
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "RequestValidationError",
        "Request validation failed",
        details=jsonable_errors(exc)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Plain HTTP errors"""
    return error_response(exc.status_code, "HTTPException", str(exc.detail))


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Database errors"""
    logger.error(f"Database error on {request.url.path}: {exc}")
    return error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "DatabaseError",
        "Pricing data is temporarily unavailable"
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Anything else"""
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalError",
        "Internal server error"
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
