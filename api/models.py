"""SQLAlchemy models for trips and everything attached to them."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class UUIDPrimaryKeyMixin:
    """Primary key generated by PostgreSQL (gen_random_uuid())."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )


class Trip(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "trips"

    destination: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_email: Mapped[str] = mapped_column(Text, nullable=False)
    owner_name: Mapped[str] = mapped_column(Text, nullable=False)
    is_confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ends_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class Participant(UUIDPrimaryKeyMixin, Base):
    """Someone invited to a trip.

    ``is_confirmed`` only ever moves from False to True.
    """

    __tablename__ = "participants"
    __table_args__ = (Index("ix_participants_trip_id", "trip_id"),)

    trip_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("trips.id"), nullable=False
    )
    email: Mapped[str] = mapped_column(Text, nullable=False)
    is_confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )


class Activity(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "activities"
    __table_args__ = (Index("ix_activities_trip_id", "trip_id"),)

    trip_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("trips.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    occurs_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class Link(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "links"
    __table_args__ = (Index("ix_links_trip_id", "trip_id"),)

    trip_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("trips.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
