"""Fixtures for StockWatch tests."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta
from typing import Optional

import pytest

from stockwatch.db import Database, WatchlistRepository
from stockwatch.schemas.indicators import (
    BollingerBands,
    CrossPosition,
    IndicatorSnapshot,
    MACDPoint,
)
from stockwatch.schemas.market import PricePoint, PriceSeries, QuoteSummary
from stockwatch.schemas.watchlist import GeneralInfo, TickerSnapshot
from stockwatch.services.base import NoDataError, SourceUnavailableError
from stockwatch.services.quotes import QuoteSource
from stockwatch.services.watchlist import WatchlistStore


# --- Series helpers ---


def make_series(closes: list[float], ticker: str = "TEST", start: date = date(2024, 1, 1)) -> PriceSeries:
    return PriceSeries(
        ticker=ticker,
        points=[PricePoint(date=start + timedelta(days=i), close=c) for i, c in enumerate(closes)],
    )


def linear_closes(start: float = 100.0, count: int = 20) -> list[float]:
    return [start + i for i in range(count)]


def geometric_closes(start: float = 100.0, count: int = 60, rate: float = 0.01) -> list[float]:
    return [start * (1 + rate) ** i for i in range(count)]


def make_snapshot(ticker: str = "AAPL", price: Optional[float] = 150.0) -> TickerSnapshot:
    return TickerSnapshot(
        general=GeneralInfo(ticker=ticker, full_name=f"{ticker} Inc.", type="EQUITY", price=price),
        technical_indicators=IndicatorSnapshot(
            rsi=55.5,
            macd=(MACDPoint(macd_line=1.2, signal_line=1.0, histogram=0.2),),
            cross_position=CrossPosition.UP,
            bollinger=BollingerBands(upper=160.0, middle=150.0, lower=140.0),
            sma=(149.5, 150.0),
        ),
    )


# --- Fakes ---


class FakeQuoteSource(QuoteSource):
    """In-memory quote source keyed by upper-cased ticker."""

    def __init__(
        self,
        closes: Optional[dict[str, list[float]]] = None,
        summaries: Optional[dict[str, QuoteSummary]] = None,
        failing: Optional[set[str]] = None,
    ):
        self.closes = closes or {}
        self.summaries = summaries or {}
        self.failing = failing or set()
        self.history_calls: list[tuple[str, date, date]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "Fake"

    async def fetch_history(self, ticker: str, from_date: date, to_date: date) -> PriceSeries:
        self.history_calls.append((ticker, from_date, to_date))
        if ticker in self.failing:
            raise SourceUnavailableError(self.name, f"Failed to fetch {ticker}")
        closes = self.closes.get(ticker)
        if not closes:
            raise NoDataError(self.name, f"No quotes found for {ticker}")
        return make_series(closes, ticker=ticker, start=from_date)

    async def fetch_summary(self, ticker: str) -> QuoteSummary:
        return self.summaries.get(ticker, QuoteSummary())

    async def close(self) -> None:
        self.closed = True


class InMemoryRepository:
    """Blob repository with a suspension point between read and return."""

    def __init__(self, read_delay: float = 0.0):
        self.blobs: dict[str, str] = {}
        self.read_delay = read_delay
        self.writes = 0

    async def get_blob(self, user_id: str) -> Optional[str]:
        blob = self.blobs.get(user_id)
        await asyncio.sleep(self.read_delay)
        return blob

    async def put_blob(self, user_id: str, blob: str) -> None:
        self.writes += 1
        self.blobs[user_id] = blob


# --- Fixtures ---


@pytest.fixture
def quote_source() -> FakeQuoteSource:
    return FakeQuoteSource(
        closes={
            "AAPL": geometric_closes(150.0, 80),
            "MSFT": linear_closes(300.0, 60),
            "TINY": [10.0, 10.5, 11.0],
        },
        summaries={
            "AAPL": QuoteSummary(
                symbol="AAPL",
                long_name="Apple Inc.",
                quote_type="EQUITY",
                regular_market_price=190.5,
            ),
            "MSFT": QuoteSummary(symbol="MSFT", long_name="Microsoft Corporation"),
        },
        failing={"DOWN"},
    )


@pytest.fixture
async def database():
    db = Database.from_path(":memory:")
    await db.init()
    yield db
    await db.close()


@pytest.fixture
def repository(database) -> WatchlistRepository:
    return WatchlistRepository(database)


@pytest.fixture
def store(repository) -> WatchlistStore:
    return WatchlistStore(repository)
