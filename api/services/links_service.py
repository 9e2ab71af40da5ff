"""Trip link service."""

import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from models import Link
from repositories.link_repository import LinkRepository
from schemas import CreateLinkRequest
from services.common import store_errors
from services.trips_service import get_trip

logger = get_logger(__name__)


async def get_trip_links(db: AsyncSession, raw_trip_id: str) -> Sequence[Link]:
    trip = await get_trip(db, raw_trip_id)

    with store_errors("links.list", trip_id=raw_trip_id):
        return await LinkRepository(db).get_trip_links(trip.id)


async def create_trip_link(
    db: AsyncSession, raw_trip_id: str, request: CreateLinkRequest
) -> uuid.UUID:
    trip = await get_trip(db, raw_trip_id)

    with store_errors("link.insert", trip_id=raw_trip_id):
        link_id = await LinkRepository(db).create_trip_link(
            trip.id, title=request.title, url=str(request.url)
        )

    logger.info("link.created", trip_id=raw_trip_id, link_id=str(link_id))
    return link_id
