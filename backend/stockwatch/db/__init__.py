"""
Database module for StockWatch.

Provides the SQLite database handle, models and the watchlist repository.
"""

from stockwatch.db.database import Database, sqlite_url
from stockwatch.db.models import Base, Watchlist
from stockwatch.db.repository import WatchlistRepository

__all__ = [
    "Database",
    "sqlite_url",
    "Base",
    "Watchlist",
    "WatchlistRepository",
]
