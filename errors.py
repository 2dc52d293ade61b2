import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import ConnectionFailure, DuplicateKeyError, PyMongoError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error carrying the HTTP status to answer with"""

    def __init__(self, message: str, status_code: int = 500, details: Optional[dict] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class DatabaseUnavailableError(AppError):
    def __init__(self, message: str = "Database not connected"):
        super().__init__(message=message, status_code=503)


class ConflictError(AppError):
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message=message, status_code=409, details=details)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    content = {"detail": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    logger.warning("Duplicate key on %s %s: %s", request.method, request.url.path, exc.details)
    key = (exc.details or {}).get("keyValue")
    content = {"detail": "A record with the same unique value already exists"}
    if key:
        content["details"] = {"key": {k: str(v) for k, v in key.items()}}
    return JSONResponse(status_code=409, content=content)


async def connection_failure_handler(request: Request, exc: ConnectionFailure) -> JSONResponse:
    logger.error("Database unreachable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database not connected"})


async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(ConnectionFailure, connection_failure_handler)
    app.add_exception_handler(PyMongoError, database_error_handler)
