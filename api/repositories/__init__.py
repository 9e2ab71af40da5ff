"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping routes thin and focused
on HTTP handling. Every method is a single parameterized statement; driver
errors propagate unchanged to the caller.
"""

from repositories.activity_repository import ActivityRepository
from repositories.link_repository import LinkRepository
from repositories.participant_repository import ParticipantRepository
from repositories.trip_repository import TripRepository
from repositories.utils import log_slow_query

__all__ = [
    "ActivityRepository",
    "LinkRepository",
    "ParticipantRepository",
    "TripRepository",
    "log_slow_query",
]
