"""Repository for trip link operations."""

import uuid
from collections.abc import Sequence

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Link
from repositories.utils import log_slow_query


class LinkRepository:
    """Repository for Link database operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @log_slow_query("get_trip_links")
    async def get_trip_links(self, trip_id: uuid.UUID) -> Sequence[Link]:
        result = await self.db.execute(
            select(Link).where(Link.trip_id == trip_id).order_by(Link.title, Link.id)
        )
        return result.scalars().all()

    @log_slow_query("create_trip_link")
    async def create_trip_link(
        self,
        trip_id: uuid.UUID,
        *,
        title: str,
        url: str,
    ) -> uuid.UUID:
        """Insert a link and return its generated ID."""
        result = await self.db.execute(
            insert(Link)
            .values(trip_id=trip_id, title=title, url=url)
            .returning(Link.id)
        )
        return result.scalar_one()
