"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from stockwatch.api.v1.endpoints import stocks, watchlist

router = APIRouter()

# Include all endpoint routers
router.include_router(stocks.router, prefix="/finance", tags=["Stocks"])
router.include_router(watchlist.router, prefix="/watchlist", tags=["Watchlist"])
