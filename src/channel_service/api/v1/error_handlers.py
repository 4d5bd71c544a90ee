# channel_service/api/v1/error_handlers.py
"""
FastAPI exception handlers that map repository-level exceptions to HTTP responses.

Every failing response has the same body shape:
    {"message": "...", "sqlstate": "23505"}     # sqlstate only for conflicts

The status code and body come from the exception itself (.http_status() / .to_payload()),
so these handlers stay tiny. Register them once from the app factory:

    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from channel_service.exceptions.base import (
    RepositoryError,
    ConflictError,
    NotFoundError,
    InternalError,
)

logger = logging.getLogger(__name__)


# Most specific first (ConflictError, NotFoundError, InternalError)

async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """
    409 Conflict. Payload carries the database message and its native code.
    """
    logger.info("ConflictError for %s %s: sqlstate=%s", request.method, request.url.path, exc.sqlstate)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """
    404 Not Found.
    """
    logger.info("NotFoundError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
    """
    500. The cause was already logged with its traceback where it was classified;
    only the generic message goes out.
    """
    logger.warning("InternalError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Fallback for any other RepositoryError (status from its error_code, 500 if none).
    """
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    422 for malformed payloads / path parameters, in the shared error body shape.
    """
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg', 'invalid')}")

    logger.info("Validation failed for %s %s: %d problem(s)", request.method, request.url.path, len(problems))
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request: " + "; ".join(problems)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all for anything that escaped classification. Never exposes internals.

    Starlette runs this handler from ServerErrorMiddleware, which re-raises the
    exception after the response is sent; the server logs that traceback. Only a
    one-line error record (request id included) is written here.
    """
    logger.error("Unhandled error for %s %s: %s", request.method, request.url.path, type(exc).__name__)
    fallback = InternalError()
    return JSONResponse(status_code=fallback.http_status(), content=fallback.to_payload())


# Helper to register all handlers on an app (called from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InternalError, internal_error_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
