"""Participant service: confirmation and listing.

Confirmation is the only state machine in the system:

    unconfirmed --confirm--> confirmed

Confirming an already-confirmed participant is rejected rather than
treated as a successful no-op.
"""

import uuid
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from models import Participant
from repositories.participant_repository import ParticipantRepository
from services.common import parse_id, store_errors
from services.trips_service import get_trip

logger = get_logger(__name__)


class ParticipantStore(Protocol):
    """The store capabilities the confirmation flow needs, and nothing more."""

    async def get_participant(
        self, participant_id: uuid.UUID
    ) -> Participant | None: ...

    async def confirm_participant(self, participant_id: uuid.UUID) -> None: ...


class ParticipantNotFoundError(Exception):
    """Raised when no participant matches the given ID."""

    def __init__(self, participant_id: uuid.UUID):
        self.participant_id = participant_id
        super().__init__(f"Participant not found: {participant_id}")


class ParticipantAlreadyConfirmedError(Exception):
    """Raised when confirming a participant that is already confirmed."""

    def __init__(self, participant_id: uuid.UUID):
        self.participant_id = participant_id
        super().__init__(f"Participant already confirmed: {participant_id}")


async def confirm_participant(store: ParticipantStore, raw_participant_id: str) -> None:
    """Flip a participant from unconfirmed to confirmed.

    Raises:
        InvalidIdentifierError: ID is not a UUID (no store call is made).
        ParticipantNotFoundError: No participant with this ID.
        ParticipantAlreadyConfirmedError: Participant was already confirmed.
        StoreError: Lookup or write failed; the cause has been logged.
    """
    participant_id = parse_id(raw_participant_id)

    with store_errors("participant.lookup", participant_id=raw_participant_id):
        participant = await store.get_participant(participant_id)

    if participant is None:
        raise ParticipantNotFoundError(participant_id)

    if participant.is_confirmed:
        raise ParticipantAlreadyConfirmedError(participant_id)

    with store_errors("participant.confirm", participant_id=raw_participant_id):
        await store.confirm_participant(participant_id)

    logger.info("participant.confirmed", participant_id=raw_participant_id)


async def get_trip_participants(
    db: AsyncSession, raw_trip_id: str
) -> Sequence[Participant]:
    """List a trip's participants."""
    trip = await get_trip(db, raw_trip_id)

    with store_errors("participants.list", trip_id=raw_trip_id):
        return await ParticipantRepository(db).get_participants(trip.id)
