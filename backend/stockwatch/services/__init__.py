"""
StockWatch Services

Service layer containing all business logic:
quote source -> indicator engine -> snapshot builder -> watchlist store.
"""

from stockwatch.services.base import ServiceError

__all__ = ["ServiceError"]
