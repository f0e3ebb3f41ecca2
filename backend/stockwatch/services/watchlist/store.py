"""
Watchlist Store

Owns the mapping user id -> ordered list of TickerSnapshot.

Every mutation is a read-modify-write of the user's whole blob. With
serialize_mutations=True (default) mutations for the same user run one at a
time under a per-user asyncio.Lock; with False, concurrent mutations for
one user race and the last write wins. Distinct users never share a lock.
A user's lock exists only while one of their mutations is running or waiting.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from pydantic import ValidationError

from stockwatch.db.repository import WatchlistRepository
from stockwatch.schemas.watchlist import (
    TickerSnapshot,
    dump_watchlist,
    load_watchlist,
    normalize_ticker,
)
from stockwatch.services.base import (
    DuplicateTickerError,
    NotFoundError,
    NoWatchlistError,
    StoreError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "WatchlistStore"


class WatchlistStore:
    """Per-user watchlists with uniqueness by normalized ticker."""

    def __init__(self, repository: WatchlistRepository, serialize_mutations: bool = True):
        self.repository = repository
        self.serialize_mutations = serialize_mutations
        # user id -> (lock, number of mutations holding or awaiting it)
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    async def list(self, user_id: str) -> List[TickerSnapshot]:
        """User's watchlist in insertion order; empty if none stored yet."""
        stocks = await self._load(user_id)
        return stocks or []

    async def add(self, user_id: str, snapshot: TickerSnapshot) -> List[TickerSnapshot]:
        """
        Append a snapshot and persist the whole list.

        Raises:
            DuplicateTickerError: Same normalized ticker already tracked
        """
        async with self._mutation(user_id):
            stocks = await self._load(user_id) or []

            key = snapshot.key
            if any(s.key == key for s in stocks):
                raise DuplicateTickerError(
                    SERVICE_NAME,
                    f"{key} is already in the watchlist",
                    details={"ticker": key},
                )

            updated = [*stocks, snapshot]
            await self.repository.put_blob(user_id, dump_watchlist(updated))

        logger.info(f"Added {key} to watchlist of user {user_id} ({len(updated)} stocks)")
        return updated

    async def remove(self, user_id: str, ticker: str) -> List[TickerSnapshot]:
        """
        Delete the entry matching `ticker`, preserving order of the rest.

        Raises:
            NoWatchlistError: Nothing stored for the user
            NotFoundError: No entry matches the normalized ticker
        """
        key = normalize_ticker(ticker)

        async with self._mutation(user_id):
            stocks = await self._load(user_id)
            if stocks is None:
                raise NoWatchlistError(
                    SERVICE_NAME,
                    "Watchlist not found",
                    details={"ticker": key},
                )

            index = next((i for i, s in enumerate(stocks) if s.key == key), None)
            if index is None:
                raise NotFoundError(
                    SERVICE_NAME,
                    f"{key} is not in the watchlist",
                    details={"ticker": key},
                )

            updated = stocks[:index] + stocks[index + 1 :]
            await self.repository.put_blob(user_id, dump_watchlist(updated))

        logger.info(f"Removed {key} from watchlist of user {user_id} ({len(updated)} stocks)")
        return updated

    async def _load(self, user_id: str) -> Optional[List[TickerSnapshot]]:
        blob = await self.repository.get_blob(user_id)
        if blob is None:
            return None
        try:
            return load_watchlist(blob)
        except ValidationError as e:
            logger.error(f"Stored watchlist for user {user_id} is unreadable: {e}")
            raise StoreError(SERVICE_NAME, "Stored watchlist is unreadable") from e

    @asynccontextmanager
    async def _mutation(self, user_id: str) -> AsyncIterator[None]:
        if not self.serialize_mutations:
            yield
            return

        lock, users = self._locks.get(user_id) or (asyncio.Lock(), 0)
        self._locks[user_id] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[user_id]
            if users == 1:
                # Last holder out
                del self._locks[user_id]
            else:
                self._locks[user_id] = (lock, users - 1)
