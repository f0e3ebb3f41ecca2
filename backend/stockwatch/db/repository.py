"""
Watchlist blob repository.

get_blob/put_blob are the only operations the watchlist store needs:
one row per user, insert-or-replace semantics.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError

from stockwatch.db.database import Database
from stockwatch.db.models import Watchlist
from stockwatch.services.base import StoreError

logger = logging.getLogger(__name__)

SERVICE_NAME = "WatchlistRepository"


class WatchlistRepository:
    """Reads and replaces per-user watchlist blobs."""

    def __init__(self, db: Database):
        self.db = db

    async def get_blob(self, user_id: str) -> Optional[str]:
        """Serialized list for the user, or None if nothing is stored."""
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(Watchlist.stocks).where(Watchlist.user_id == user_id)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read watchlist for user {user_id}: {e}")
            raise StoreError(SERVICE_NAME, "Failed to read watchlist") from e

    async def put_blob(self, user_id: str, blob: str) -> None:
        """Insert or replace the user's serialized list in one transaction."""
        now = datetime.utcnow()
        stmt = insert(Watchlist).values(user_id=user_id, stocks=blob, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Watchlist.user_id],
            set_={"stocks": stmt.excluded.stocks, "updated_at": stmt.excluded.updated_at},
        )
        try:
            async with self.db.session() as session:
                await session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to write watchlist for user {user_id}: {e}")
            raise StoreError(SERVICE_NAME, "Failed to write watchlist") from e
