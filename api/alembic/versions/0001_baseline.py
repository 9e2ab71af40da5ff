"""baseline: trips, participants, activities, links

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_baseline"
down_revision = None
branch_labels = None
depends_on = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _trip_id_column() -> sa.Column:
    return sa.Column("trip_id", postgresql.UUID(as_uuid=True), nullable=False)


def upgrade() -> None:
    # gen_random_uuid() is built in from PostgreSQL 13; older servers need pgcrypto
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table(
        "trips",
        _id_column(),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("owner_email", sa.Text(), nullable=False),
        sa.Column("owner_name", sa.Text(), nullable=False),
        sa.Column(
            "is_confirmed", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "participants",
        _id_column(),
        _trip_id_column(),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column(
            "is_confirmed", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"]),
    )
    op.create_index("ix_participants_trip_id", "participants", ["trip_id"])

    op.create_table(
        "activities",
        _id_column(),
        _trip_id_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("occurs_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"]),
    )
    op.create_index("ix_activities_trip_id", "activities", ["trip_id"])

    op.create_table(
        "links",
        _id_column(),
        _trip_id_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"]),
    )
    op.create_index("ix_links_trip_id", "links", ["trip_id"])


def downgrade() -> None:
    op.drop_index("ix_links_trip_id", table_name="links")
    op.drop_table("links")
    op.drop_index("ix_activities_trip_id", table_name="activities")
    op.drop_table("activities")
    op.drop_index("ix_participants_trip_id", table_name="participants")
    op.drop_table("participants")
    op.drop_table("trips")
