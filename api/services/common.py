"""Shared helpers and errors for the service layer."""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from core.logger import get_logger

logger = get_logger(__name__)


class InvalidIdentifierError(Exception):
    """Raised when a path identifier is not a valid UUID."""

    def __init__(self, raw_id: str):
        self.raw_id = raw_id
        super().__init__(f"Invalid uuid: {raw_id!r}")


class StoreError(Exception):
    """Raised when the store fails for a reason other than a missing row.

    The underlying driver error is chained as ``__cause__`` and has
    already been logged; callers should respond with a generic message.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Store operation failed: {operation}")


def parse_id(raw_id: str) -> uuid.UUID:
    """Parse a path identifier, raising InvalidIdentifierError if malformed."""
    try:
        return uuid.UUID(raw_id)
    except (ValueError, AttributeError, TypeError) as e:
        raise InvalidIdentifierError(raw_id) from e


@contextmanager
def store_errors(operation: str, **context: Any) -> Iterator[None]:
    """Log unexpected store failures and re-raise them as StoreError.

    Usage:
        with store_errors("trip.lookup", trip_id=raw_id):
            trip = await repo.get_trip(trip_id)
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            f"{operation}.failed",
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        raise StoreError(operation) from e
