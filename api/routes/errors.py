"""Translation of service-layer exceptions into HTTP errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException
from starlette import status

from services.common import InvalidIdentifierError, StoreError
from services.participants_service import (
    ParticipantAlreadyConfirmedError,
    ParticipantNotFoundError,
)
from services.trips_service import TripNotFoundError

GENERIC_ERROR_MESSAGE = "something went wrong"

_CLIENT_ERRORS: dict[type[Exception], str] = {
    InvalidIdentifierError: "invalid uuid",
    TripNotFoundError: "trip not found",
    ParticipantNotFoundError: "participant not found",
    ParticipantAlreadyConfirmedError: "participant is already confirmed",
}


@contextmanager
def service_errors() -> Iterator[None]:
    """Map domain exceptions raised inside the block to HTTPException.

    Client-side problems become 400 with a short message; StoreError
    becomes 500 with a generic message (the cause was already logged).
    """
    try:
        yield
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_ERROR_MESSAGE,
        ) from e
    except tuple(_CLIENT_ERRORS) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_CLIENT_ERRORS[type(e)],
        ) from e
