"""Pydantic schemas for API request/response validation."""

import uuid
from datetime import date, datetime
from typing import Annotated, Self

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    StringConstraints,
    model_validator,
)

# Length limits apply after surrounding whitespace is stripped.
Title = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]
Destination = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=4, max_length=255)
]


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    message: str


# =============================================================================
# Trips
# =============================================================================


class TripDatesMixin(BaseModel):
    """Shared start/end validation for trip create and update bodies.

    Both dates must carry a UTC offset so they can be compared and stored
    without guessing a timezone.
    """

    starts_at: AwareDatetime
    ends_at: AwareDatetime

    @model_validator(mode="after")
    def validate_dates(self) -> Self:
        if self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be before starts_at")
        return self


class CreateTripRequest(TripDatesMixin):
    """Request to create a trip and invite its participants."""

    destination: Destination
    emails_to_invite: list[EmailStr]
    owner_name: Title
    owner_email: EmailStr


class CreateTripResponse(BaseModel):
    trip_id: uuid.UUID = Field(serialization_alias="tripId")


class UpdateTripRequest(TripDatesMixin):
    destination: Destination


class TripDetails(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    destination: str
    starts_at: datetime
    ends_at: datetime
    is_confirmed: bool


class GetTripResponse(BaseModel):
    trip: TripDetails


# =============================================================================
# Activities
# =============================================================================


class CreateActivityRequest(BaseModel):
    title: Title
    occurs_at: AwareDatetime


class CreateActivityResponse(BaseModel):
    activity_id: uuid.UUID = Field(serialization_alias="activityId")


class ActivityDetails(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    occurs_at: datetime


class ActivitiesByDay(BaseModel):
    """Activities that fall on the same calendar day."""

    date: date
    activities: list[ActivityDetails]


class GetTripActivitiesResponse(BaseModel):
    activities: list[ActivitiesByDay]


# =============================================================================
# Links
# =============================================================================


class CreateLinkRequest(BaseModel):
    title: Title
    url: HttpUrl


class CreateLinkResponse(BaseModel):
    link_id: uuid.UUID = Field(serialization_alias="linkId")


class LinkDetails(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    url: str


class GetLinksResponse(BaseModel):
    links: list[LinkDetails]


# =============================================================================
# Participants
# =============================================================================


class ParticipantDetails(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    is_confirmed: bool


class GetParticipantsResponse(BaseModel):
    participants: list[ParticipantDetails]


# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str


class PoolStatusResponse(BaseModel):
    pool_size: int
    checked_out: int
    overflow: int
    checked_in: int


class DetailedHealthResponse(HealthResponse):
    database: bool
    pool: PoolStatusResponse | None = None
