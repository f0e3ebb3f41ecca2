"""
Watchlist API Endpoints

Add, remove and list the caller's tracked tickers.
Each add recomputes the ticker's snapshot and freezes it in the list.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic.alias_generators import to_snake

from stockwatch.api.deps import (
    get_current_user_id,
    get_param_overrides,
    get_snapshot_service,
    get_watchlist_store,
)
from stockwatch.schemas.indicators import IndicatorParams
from stockwatch.schemas.watchlist import (
    AddStockRequest,
    WatchlistResponse,
    WatchlistUpdateResponse,
)
from stockwatch.services.snapshot import SnapshotService
from stockwatch.services.watchlist import WatchlistStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=WatchlistResponse)
async def list_watchlist(
    user_id: str = Depends(get_current_user_id),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """List the caller's watchlist in insertion order."""
    stocks = await store.list(user_id)
    return WatchlistResponse(stocks=stocks)


@router.post("", response_model=WatchlistUpdateResponse, status_code=201)
async def add_to_watchlist(
    body: AddStockRequest,
    query_overrides: dict[str, Any] = Depends(get_param_overrides),
    user_id: str = Depends(get_current_user_id),
    snapshots: SnapshotService = Depends(get_snapshot_service),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """
    Add a ticker to the caller's watchlist.

    Indicator overrides may come from query parameters or the body's
    `params` object; body values win.
    """
    body_overrides = {to_snake(k): v for k, v in (body.params or {}).items()}
    params = IndicatorParams.from_overrides({**query_overrides, **body_overrides})

    snapshot = await snapshots.lookup(body.ticker, params)
    stocks = await store.add(user_id, snapshot)

    return WatchlistUpdateResponse(message="Stock added to watchlist", stocks=stocks)


@router.delete("/{ticker}", response_model=WatchlistUpdateResponse)
async def remove_from_watchlist(
    ticker: str,
    user_id: str = Depends(get_current_user_id),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Remove a ticker (case-insensitive) from the caller's watchlist."""
    stocks = await store.remove(user_id, ticker)
    return WatchlistUpdateResponse(message="Stock removed from watchlist", stocks=stocks)
