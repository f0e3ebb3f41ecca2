"""
Watchlist Store

CONTRACT:
    list(user_id)             -> list[TickerSnapshot]
    add(user_id, snapshot)    -> updated list | DuplicateTicker
    remove(user_id, ticker)   -> updated list | NotFound / NoWatchlist

Tickers are unique per user, compared upper-cased. Each mutation replaces
the stored list in one transaction or leaves it untouched.
"""

from stockwatch.services.watchlist.store import WatchlistStore

__all__ = [
    "WatchlistStore",
]
