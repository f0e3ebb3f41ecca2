"""
Stock Lookup Endpoints

Point-in-time indicator snapshot for a ticker, without persisting it.
"""

import logging

from fastapi import APIRouter, Depends

from stockwatch.api.deps import (
    get_current_user_id,
    get_indicator_params,
    get_snapshot_service,
)
from stockwatch.schemas.indicators import IndicatorParams
from stockwatch.schemas.watchlist import TickerSnapshot
from stockwatch.services.snapshot import SnapshotService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stock/{ticker}", response_model=TickerSnapshot)
async def get_stock(
    ticker: str,
    params: IndicatorParams = Depends(get_indicator_params),
    snapshots: SnapshotService = Depends(get_snapshot_service),
    user_id: str = Depends(get_current_user_id),
):
    """
    Get the indicator snapshot for a ticker.

    Fetches one year of daily closes and returns:
        - general: ticker, full name, quote type, latest price
        - technicalIndicators: RSI, last 14 MACD points, cross position,
          latest Bollinger Bands, last 10 SMA values

    Indicator periods can be overridden with query parameters
    (rsiPeriod, macdFast, macdSlow, macdSignal, bbPeriod, bbStdDev, smaPeriod).
    """
    return await snapshots.lookup(ticker, params)
