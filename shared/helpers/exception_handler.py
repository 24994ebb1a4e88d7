import logging
import traceback
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from shared.core.config import settings
from shared.core.exceptions import AppError, StorageError
from shared.helpers.json_response_helper import failure_body
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def _server_error_data(details):
    # internals are never exposed in production
    if settings.is_production or not details:
        return None
    return {"details": details}


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        data = exc.data
        if isinstance(exc, StorageError):
            logger.error("Storage failure on %s %s: %s",
                         request.method, request.url.path, exc.details or exc.message)
            data = _server_error_data(exc.details)
        elif exc.http_status >= 500:
            logger.error("%s on %s %s", exc.message,
                         request.method, request.url.path)
        else:
            logger.info("%s %s -> %s %s", request.method,
                        request.url.path, exc.http_status, exc.message)

        return JSONResponse(
            content=failure_body(exc.message, exc.status_code, data),
            status_code=exc.http_status)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            content=failure_body(str(exc.detail), str(exc.status_code)),
            status_code=exc.status_code or 400,
            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
            for err in exc.errors()
        ]
        return JSONResponse(
            content=failure_body("Invalid request", AppStatusCode.INVALID_INPUT, errors),
            status_code=422)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s\n%s", request.method,
                     request.url.path, traceback.format_exc())
        return JSONResponse(
            content=failure_body("Database operation failed",
                                 AppStatusCode.STORAGE_ERROR,
                                 _server_error_data(str(exc))),
            status_code=500)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s\n%s", request.method,
                     request.url.path, traceback.format_exc())
        return JSONResponse(
            content=failure_body("Internal server error",
                                 AppStatusCode.OPERATION_ERROR,
                                 _server_error_data(str(exc))),
            status_code=500)
