"""
Error taxonomy for QR Selfie and the handlers that turn it into JSON responses.

Every error reaches the client as ``{"error": "<message>"}``. Internal errors
keep their cause for the server log only.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Bad request"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    status_code = 500


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        cause = exc.__cause__ or exc
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            cause,
            exc_info=(type(cause), cause, cause.__traceback__),
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Request validation failures per path; anything else gets a generic message
VALIDATION_MESSAGES = {
    "/api/upload": "No photo uploaded",
}


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    message = VALIDATION_MESSAGES.get(request.url.path, "Invalid request")
    return JSONResponse(status_code=ValidationError.status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
