"""Repository for trip activity operations."""

import uuid
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Activity
from repositories.utils import log_slow_query


class ActivityRepository:
    """Repository for Activity database operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @log_slow_query("get_trip_activities")
    async def get_trip_activities(self, trip_id: uuid.UUID) -> Sequence[Activity]:
        """Get a trip's activities, earliest first."""
        result = await self.db.execute(
            select(Activity)
            .where(Activity.trip_id == trip_id)
            .order_by(Activity.occurs_at, Activity.id)
        )
        return result.scalars().all()

    @log_slow_query("create_activity")
    async def create_activity(
        self,
        trip_id: uuid.UUID,
        *,
        title: str,
        occurs_at: datetime,
    ) -> uuid.UUID:
        """Insert an activity and return its generated ID."""
        result = await self.db.execute(
            insert(Activity)
            .values(trip_id=trip_id, title=title, occurs_at=occurs_at)
            .returning(Activity.id)
        )
        return result.scalar_one()
