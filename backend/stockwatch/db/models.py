"""
SQLAlchemy models for StockWatch database.

Uses SQLite for local persistence of per-user watchlists.
Each user owns exactly one row; the list is stored as a JSON array of
ticker snapshots and replaced wholesale on every mutation.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Watchlist(Base):
    """
    A user's watchlist blob.
    Ordered JSON array of TickerSnapshot records (camelCase keys).
    """
    __tablename__ = "watchlists"

    user_id = Column(String(64), primary_key=True)
    stocks = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
