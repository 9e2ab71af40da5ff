"""Participant endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from starlette import status

from core.database import DbSession
from repositories.participant_repository import ParticipantRepository
from routes.errors import service_errors
from schemas import ErrorResponse
from services.participants_service import ParticipantStore, confirm_participant

router = APIRouter(prefix="/participants", tags=["participants"])


def get_participant_store(db: DbSession) -> ParticipantStore:
    """The store backing participant confirmation (overridable in tests)."""
    return ParticipantRepository(db)


ParticipantStoreDep = Annotated[ParticipantStore, Depends(get_participant_store)]


@router.patch(
    "/{participant_id}/confirm",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse, "description": "Bad request"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def confirm_participant_endpoint(
    participant_id: str,
    store: ParticipantStoreDep,
) -> Response:
    """Confirms a participant on a trip."""
    with service_errors():
        await confirm_participant(store, participant_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
