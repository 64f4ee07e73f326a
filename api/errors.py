"""
Exception handlers rendering every failure as one JSON error envelope
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from core.exceptions import MarketplaceError
from schemas.api import ErrorResponse
import logging

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, detail=None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[{_request_id(request)}] {exc}")
    else:
        logger.info(f"[{_request_id(request)}] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message, exc.detail)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body/query validation failures are InvalidInput (400), not 422"""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))

    logger.info(f"[{_request_id(request)}] Invalid request on {request.url.path}: {problems}")
    return error_response(400, "Invalid request", "; ".join(problems) or None)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"[{_request_id(request)}] Database error on {request.method} {request.url.path}")
    return error_response(500, "Database operation failed", str(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) raised by the framework itself"""
    logger.info(f"[{_request_id(request)}] {request.method} {request.url.path} -> {exc.status_code}")
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[{_request_id(request)}] Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal server error", f"{type(exc).__name__}: {exc}")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
