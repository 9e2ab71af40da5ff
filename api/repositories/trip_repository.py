"""Repository for trip operations."""

import uuid
from datetime import datetime

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import Trip
from repositories.utils import log_slow_query


class TripRepository:
    """Repository for Trip database operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @log_slow_query("get_trip")
    async def get_trip(self, trip_id: uuid.UUID) -> Trip | None:
        """Get a trip by its ID."""
        result = await self.db.execute(select(Trip).where(Trip.id == trip_id))
        return result.scalar_one_or_none()

    @log_slow_query("insert_trip")
    async def insert_trip(
        self,
        *,
        destination: str,
        owner_email: str,
        owner_name: str,
        starts_at: datetime,
        ends_at: datetime,
    ) -> uuid.UUID:
        """Insert a trip and return its generated ID."""
        result = await self.db.execute(
            insert(Trip)
            .values(
                destination=destination,
                owner_email=owner_email,
                owner_name=owner_name,
                starts_at=starts_at,
                ends_at=ends_at,
            )
            .returning(Trip.id)
        )
        return result.scalar_one()

    @log_slow_query("update_trip")
    async def update_trip(
        self,
        trip_id: uuid.UUID,
        *,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        is_confirmed: bool,
    ) -> None:
        await self.db.execute(
            update(Trip)
            .where(Trip.id == trip_id)
            .values(
                destination=destination,
                starts_at=starts_at,
                ends_at=ends_at,
                is_confirmed=is_confirmed,
            )
        )
