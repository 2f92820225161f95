"""Map exceptions to the JSON envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..api.responses import api_response
from ..errors import UserError

logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    return api_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        messages.append(message)
    return api_response(status.HTTP_400_BAD_REQUEST, ", ".join(messages))


async def user_error_handler(request: Request, exc: UserError) -> JSONResponse:
    return api_response(exc.status_code, exc.message)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} - 500", exc_info=exc)
    return api_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
