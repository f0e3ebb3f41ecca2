"""
Request dependencies.

Long-lived collaborators (database, quote source, watchlist store) are
created once in the app lifespan and read from app.state here.
"""

from typing import Any, Optional

from fastapi import Depends, Header, HTTPException, Query, Request

from stockwatch.core.config import Settings
from stockwatch.schemas.indicators import IndicatorParams
from stockwatch.services.quotes import QuoteSource
from stockwatch.services.snapshot import SnapshotService
from stockwatch.services.watchlist import WatchlistStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_quote_source(request: Request) -> QuoteSource:
    return request.app.state.quote_source


def get_watchlist_store(request: Request) -> WatchlistStore:
    return request.app.state.watchlist_store


def get_snapshot_service(
    quote_source: QuoteSource = Depends(get_quote_source),
    settings: Settings = Depends(get_app_settings),
) -> SnapshotService:
    return SnapshotService(quote_source, history_days=settings.quote_history_days)


async def get_current_user_id(
    x_user_id: Optional[str] = Header(
        default=None,
        description="Authenticated user id, set by the upstream auth layer",
    ),
) -> str:
    """Caller identity. Authentication itself happens upstream."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def get_param_overrides(
    # Strings on purpose: malformed values must reach IndicatorParams
    # validation and surface as InvalidParams
    rsi_period: Optional[str] = Query(default=None, alias="rsiPeriod"),
    macd_fast: Optional[str] = Query(default=None, alias="macdFast"),
    macd_slow: Optional[str] = Query(default=None, alias="macdSlow"),
    macd_signal: Optional[str] = Query(default=None, alias="macdSignal"),
    bb_period: Optional[str] = Query(default=None, alias="bbPeriod"),
    bb_std_dev: Optional[str] = Query(default=None, alias="bbStdDev"),
    sma_period: Optional[str] = Query(default=None, alias="smaPeriod"),
) -> dict[str, Any]:
    """Indicator overrides from query parameters, each optional."""
    overrides = {
        "rsi_period": rsi_period,
        "macd_fast": macd_fast,
        "macd_slow": macd_slow,
        "macd_signal": macd_signal,
        "bb_period": bb_period,
        "bb_std_dev": bb_std_dev,
        "sma_period": sma_period,
    }
    return {k: v for k, v in overrides.items() if v is not None}


def get_indicator_params(
    overrides: dict[str, Any] = Depends(get_param_overrides),
) -> IndicatorParams:
    return IndicatorParams.from_overrides(overrides)
