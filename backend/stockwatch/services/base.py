"""
Service Errors

All failures raised by the pipeline derive from ServiceError.
The API layer maps each kind to an HTTP status (see api/errors.py).
"""

from typing import Optional


class ServiceError(Exception):
    """Base exception for service errors."""

    kind: str = "ServiceError"

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


# Indicator Engine

class InvalidParamsError(ServiceError):
    """Non-numeric or non-positive indicator parameter."""

    kind = "InvalidParams"


class InsufficientDataError(ServiceError):
    """Too few closes for the requested RSI period."""

    kind = "InsufficientData"


# Quote Source

class NoDataError(ServiceError):
    """Quote source returned no quotes for the ticker."""

    kind = "NoData"


class SourceUnavailableError(ServiceError):
    """Quote source failed or timed out."""

    kind = "SourceUnavailable"


# Watchlist Store

class DuplicateTickerError(ServiceError):
    kind = "DuplicateTicker"


class NotFoundError(ServiceError):
    kind = "NotFound"


class NoWatchlistError(ServiceError):
    kind = "NoWatchlist"


class StoreError(ServiceError):
    """Persistent store read/write failed."""

    kind = "StoreError"
