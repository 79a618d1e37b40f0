from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.helpers.Exceptions import (
    AttachmentBatchError,
    InvalidIdentifierError,
    NewsServiceError,
    NotFoundError,
)
from app.helpers.Utilities import Utils


def status_code_for(exc: Exception) -> int:
    if isinstance(exc, InvalidIdentifierError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, AttachmentBatchError):
        return 502
    if isinstance(exc, ValueError):
        return 400
    return 500


def _error_response(exc: Exception) -> JSONResponse:
    body = Utils.create_response(None, False, str(exc))
    return JSONResponse(status_code=status_code_for(exc), content=body.model_dump())


def add_error_handlers(app: FastAPI):
    """
    Translate domain errors into ServerResponse bodies with a matching status code.
    """

    @app.exception_handler(NewsServiceError)
    async def news_service_error_handler(request: Request, exc: NewsServiceError):
        if isinstance(exc, AttachmentBatchError):
            logger.warning(f"{request.method} {request.url.path} failed: {exc}")
        return _error_response(exc)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        body = Utils.create_response(None, False, "Internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())
