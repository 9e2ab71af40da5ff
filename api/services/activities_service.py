"""Trip activity service."""

import uuid
from itertools import groupby

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from repositories.activity_repository import ActivityRepository
from schemas import ActivitiesByDay, ActivityDetails, CreateActivityRequest
from services.common import store_errors
from services.trips_service import get_trip

logger = get_logger(__name__)


async def get_trip_activities(
    db: AsyncSession, raw_trip_id: str
) -> list[ActivitiesByDay]:
    """Get a trip's activities grouped by calendar day.

    Days are ascending, and so are activities within a day. Days without
    activities are omitted.
    """
    trip = await get_trip(db, raw_trip_id)

    with store_errors("activities.list", trip_id=raw_trip_id):
        activities = await ActivityRepository(db).get_trip_activities(trip.id)

    ordered = sorted(activities, key=lambda a: a.occurs_at)
    return [
        ActivitiesByDay(
            date=day,
            activities=[ActivityDetails.model_validate(a) for a in day_activities],
        )
        for day, day_activities in groupby(ordered, key=lambda a: a.occurs_at.date())
    ]


async def create_activity(
    db: AsyncSession, raw_trip_id: str, request: CreateActivityRequest
) -> uuid.UUID:
    trip = await get_trip(db, raw_trip_id)

    with store_errors("activity.insert", trip_id=raw_trip_id):
        activity_id = await ActivityRepository(db).create_activity(
            trip.id, title=request.title, occurs_at=request.occurs_at
        )

    logger.info(
        "activity.created", trip_id=raw_trip_id, activity_id=str(activity_id)
    )
    return activity_id
