"""
CONTRACT 3: Ticker Snapshots and Watchlists

TickerSnapshot is the unit stored in a user's watchlist.
A watchlist is persisted as one JSON array per user, order preserved.
"""

from typing import Annotated, Optional
from pydantic import ConfigDict, Field, StringConstraints, TypeAdapter

from stockwatch.schemas.market import CamelModel
from stockwatch.schemas.indicators import IndicatorSnapshot


def normalize_ticker(ticker: Optional[str]) -> str:
    """Identity key for dedup: stripped, upper-cased ticker."""
    return (ticker or "").strip().upper()


class GeneralInfo(CamelModel):
    """Quote metadata. Absent summary fields stay None."""

    model_config = ConfigDict(frozen=True)

    ticker: Optional[str] = None
    full_name: Optional[str] = None
    type: Optional[str] = None
    price: Optional[float] = None


class TickerSnapshot(CamelModel):
    """
    Immutable per-ticker record: metadata + indicators frozen at build time.
    """

    model_config = ConfigDict(frozen=True)

    general: GeneralInfo
    technical_indicators: IndicatorSnapshot

    @property
    def key(self) -> str:
        return normalize_ticker(self.general.ticker)


_watchlist_adapter = TypeAdapter(list[TickerSnapshot])


def dump_watchlist(stocks: list[TickerSnapshot]) -> str:
    """Serialize a watchlist to its persisted JSON form."""
    return _watchlist_adapter.dump_json(stocks, by_alias=True).decode("utf-8")


def load_watchlist(blob: str) -> list[TickerSnapshot]:
    """Deserialize a persisted watchlist blob."""
    return _watchlist_adapter.validate_json(blob)


# =============================================================================
# API payloads
# =============================================================================


class AddStockRequest(CamelModel):
    """Body of POST /watchlist."""

    ticker: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]
    params: Optional[dict] = Field(
        default=None,
        description="Indicator parameter overrides (camelCase or snake_case keys)",
    )


class WatchlistResponse(CamelModel):
    """Response for GET /watchlist."""

    stocks: list[TickerSnapshot]


class WatchlistUpdateResponse(WatchlistResponse):
    """Response for add/remove."""

    message: str

