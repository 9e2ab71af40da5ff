"""API route modules."""

from .health_routes import router as health_router
from .participants_routes import router as participants_router
from .trips_routes import router as trips_router

__all__ = [
    "health_router",
    "participants_router",
    "trips_router",
]
