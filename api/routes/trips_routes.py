"""Trip endpoints and everything scoped under /trips/{trip_id}."""

from fastapi import APIRouter, Response
from starlette import status

from core.database import DbSession
from routes.errors import service_errors
from schemas import (
    CreateActivityRequest,
    CreateActivityResponse,
    CreateLinkRequest,
    CreateLinkResponse,
    CreateTripRequest,
    CreateTripResponse,
    ErrorResponse,
    GetLinksResponse,
    GetParticipantsResponse,
    GetTripActivitiesResponse,
    GetTripResponse,
    LinkDetails,
    ParticipantDetails,
    TripDetails,
    UpdateTripRequest,
)
from services.activities_service import create_activity, get_trip_activities
from services.links_service import create_trip_link, get_trip_links
from services.participants_service import get_trip_participants
from services.trips_service import create_trip, get_trip, update_trip

router = APIRouter(prefix="/trips", tags=["trips"])

_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Bad request"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}


@router.post(
    "",
    response_model=CreateTripResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_trip_endpoint(
    body: CreateTripRequest,
    db: DbSession,
) -> CreateTripResponse:
    """Create a new trip."""
    with service_errors():
        trip_id = await create_trip(db, body)

    return CreateTripResponse(trip_id=trip_id)


@router.get("/{trip_id}", response_model=GetTripResponse, responses=_ERROR_RESPONSES)
async def get_trip_endpoint(trip_id: str, db: DbSession) -> GetTripResponse:
    """Get a trip details."""
    with service_errors():
        trip = await get_trip(db, trip_id)

    return GetTripResponse(trip=TripDetails.model_validate(trip))


@router.put(
    "/{trip_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
async def update_trip_endpoint(
    trip_id: str,
    body: UpdateTripRequest,
    db: DbSession,
) -> Response:
    """Update a trip."""
    with service_errors():
        await update_trip(db, trip_id, body)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{trip_id}/activities",
    response_model=GetTripActivitiesResponse,
    responses=_ERROR_RESPONSES,
)
async def get_trip_activities_endpoint(
    trip_id: str, db: DbSession
) -> GetTripActivitiesResponse:
    """Get a trip activities, grouped by day."""
    with service_errors():
        days = await get_trip_activities(db, trip_id)

    return GetTripActivitiesResponse(activities=days)


@router.post(
    "/{trip_id}/activities",
    response_model=CreateActivityResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_activity_endpoint(
    trip_id: str,
    body: CreateActivityRequest,
    db: DbSession,
) -> CreateActivityResponse:
    """Create a trip activity."""
    with service_errors():
        activity_id = await create_activity(db, trip_id, body)

    return CreateActivityResponse(activity_id=activity_id)


@router.get(
    "/{trip_id}/confirm",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
async def confirm_trip_endpoint(trip_id: str) -> Response:
    """Confirm a trip and send e-mail invitations."""
    # TODO: needs product rules for invitation e-mails before this can exist.
    raise NotImplementedError("not implemented")


@router.post(
    "/{trip_id}/invites",
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def invite_to_trip_endpoint(trip_id: str) -> Response:
    """Invite someone to the trip."""
    # TODO: needs product rules for invite idempotency and e-mail delivery.
    raise NotImplementedError("not implemented")


@router.get(
    "/{trip_id}/links",
    response_model=GetLinksResponse,
    responses=_ERROR_RESPONSES,
)
async def get_trip_links_endpoint(trip_id: str, db: DbSession) -> GetLinksResponse:
    """Get a trip links."""
    with service_errors():
        links = await get_trip_links(db, trip_id)

    return GetLinksResponse(links=[LinkDetails.model_validate(link) for link in links])


@router.post(
    "/{trip_id}/links",
    response_model=CreateLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_trip_link_endpoint(
    trip_id: str,
    body: CreateLinkRequest,
    db: DbSession,
) -> CreateLinkResponse:
    """Create a trip link."""
    with service_errors():
        link_id = await create_trip_link(db, trip_id, body)

    return CreateLinkResponse(link_id=link_id)


@router.get(
    "/{trip_id}/participants",
    response_model=GetParticipantsResponse,
    responses=_ERROR_RESPONSES,
)
async def get_trip_participants_endpoint(
    trip_id: str, db: DbSession
) -> GetParticipantsResponse:
    """Get a trip participants."""
    with service_errors():
        participants = await get_trip_participants(db, trip_id)

    return GetParticipantsResponse(
        participants=[ParticipantDetails.model_validate(p) for p in participants]
    )
