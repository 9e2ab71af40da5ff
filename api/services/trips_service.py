"""Trip service: creation, lookup, and update."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from models import Trip
from repositories.participant_repository import ParticipantRepository
from repositories.trip_repository import TripRepository
from schemas import CreateTripRequest, UpdateTripRequest
from services.common import parse_id, store_errors

logger = get_logger(__name__)


class TripNotFoundError(Exception):
    """Raised when no trip matches the given ID."""

    def __init__(self, trip_id: uuid.UUID):
        self.trip_id = trip_id
        super().__init__(f"Trip not found: {trip_id}")


async def get_trip(db: AsyncSession, raw_trip_id: str) -> Trip:
    """Resolve a trip from a raw path identifier.

    Raises:
        InvalidIdentifierError: ID is not a UUID.
        TripNotFoundError: No trip with this ID.
        StoreError: Lookup failed.
    """
    trip_id = parse_id(raw_trip_id)

    with store_errors("trip.lookup", trip_id=raw_trip_id):
        trip = await TripRepository(db).get_trip(trip_id)

    if trip is None:
        raise TripNotFoundError(trip_id)
    return trip


async def create_trip(db: AsyncSession, request: CreateTripRequest) -> uuid.UUID:
    """Insert a trip and its invited participants.

    Both inserts share the request's transaction, so either the trip and
    all its participants exist afterwards or nothing does. No invitation
    e-mails are sent.
    """
    with store_errors("trip.insert", destination=request.destination):
        trip_id = await TripRepository(db).insert_trip(
            destination=request.destination,
            owner_email=request.owner_email,
            owner_name=request.owner_name,
            starts_at=request.starts_at,
            ends_at=request.ends_at,
        )
        await ParticipantRepository(db).invite_participants_to_trip(
            trip_id, request.emails_to_invite
        )

    logger.info(
        "trip.created",
        trip_id=str(trip_id),
        invited_count=len(request.emails_to_invite),
    )
    return trip_id


async def update_trip(
    db: AsyncSession, raw_trip_id: str, request: UpdateTripRequest
) -> None:
    """Replace a trip's destination and dates, keeping its confirmation flag."""
    trip = await get_trip(db, raw_trip_id)

    with store_errors("trip.update", trip_id=raw_trip_id):
        await TripRepository(db).update_trip(
            trip.id,
            destination=request.destination,
            starts_at=request.starts_at,
            ends_at=request.ends_at,
            is_confirmed=trip.is_confirmed,
        )

    logger.info("trip.updated", trip_id=raw_trip_id)
