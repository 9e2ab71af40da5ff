"""Repository for participant operations."""

import uuid
from collections.abc import Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import Participant
from repositories.utils import log_slow_query


class ParticipantRepository:
    """Repository for Participant database operations.

    Also the concrete ``ParticipantStore`` used by the confirmation flow.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @log_slow_query("get_participant")
    async def get_participant(self, participant_id: uuid.UUID) -> Participant | None:
        """Get a participant by ID, or None if no row matches."""
        result = await self.db.execute(
            select(Participant).where(Participant.id == participant_id)
        )
        return result.scalar_one_or_none()

    @log_slow_query("confirm_participant")
    async def confirm_participant(self, participant_id: uuid.UUID) -> None:
        await self.db.execute(
            update(Participant)
            .where(Participant.id == participant_id)
            .values(is_confirmed=True)
        )

    @log_slow_query("get_participants")
    async def get_participants(self, trip_id: uuid.UUID) -> Sequence[Participant]:
        """Get all participants of a trip, ordered by email."""
        result = await self.db.execute(
            select(Participant)
            .where(Participant.trip_id == trip_id)
            .order_by(Participant.email)
        )
        return result.scalars().all()

    @log_slow_query("invite_participants_to_trip")
    async def invite_participants_to_trip(
        self, trip_id: uuid.UUID, emails: Sequence[str]
    ) -> None:
        """Insert one unconfirmed participant per email in a single statement."""
        if not emails:
            return
        await self.db.execute(
            insert(Participant),
            [{"trip_id": trip_id, "email": email} for email in emails],
        )
