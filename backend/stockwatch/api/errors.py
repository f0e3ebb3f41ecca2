"""
Service error -> HTTP response mapping.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockwatch.services.base import (
    DuplicateTickerError,
    InsufficientDataError,
    InvalidParamsError,
    NoDataError,
    NotFoundError,
    NoWatchlistError,
    ServiceError,
    SourceUnavailableError,
    StoreError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[ServiceError], int] = {
    InvalidParamsError: 422,
    InsufficientDataError: 422,
    NoDataError: 404,
    SourceUnavailableError: 502,
    DuplicateTickerError: 409,
    NotFoundError: 404,
    NoWatchlistError: 404,
    StoreError: 500,
}


def status_for(exc: ServiceError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 500


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.kind, "detail": exc.message, **exc.details},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
