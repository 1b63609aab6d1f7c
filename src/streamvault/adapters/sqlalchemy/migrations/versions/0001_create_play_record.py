"""create play_record

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from streamvault.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "play_record",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("track_id", sa.String(), nullable=False),
        sa.Column("played_at", UTCDateTime(), nullable=False),
        sa.Column("track_name", sa.String(), nullable=False),
        sa.Column("artist_name", sa.String(), nullable=False),
        sa.Column("album_name", sa.String(), nullable=True),
        sa.Column("ms_played", sa.BigInteger(), nullable=False),
        sa.Column(
            "source",
            sa.Enum("IMPORT", name="importsource", native_enum=False),
            nullable=False,
        ),
        sa.Column("reason_start", sa.String(), nullable=True),
        sa.Column("reason_end", sa.String(), nullable=True),
        sa.Column("skipped", sa.Boolean(), nullable=True),
        sa.Column("platform", sa.String(), nullable=True),
        sa.Column("shuffle", sa.Boolean(), nullable=True),
        sa.Column("offline", sa.Boolean(), nullable=True),
        sa.Column("conn_country", sa.String(length=8), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_play_record"),
        sa.UniqueConstraint("user_id", "track_id", "played_at", name="uq_play_record_identity"),
    )
    op.create_index("ix_play_record_user_id", "play_record", ["user_id"])
    op.create_index("ix_play_record_played_at", "play_record", ["played_at"])
    op.create_index("ix_play_record_user_track", "play_record", ["user_id", "track_id"])


def downgrade() -> None:
    op.drop_index("ix_play_record_user_track", table_name="play_record")
    op.drop_index("ix_play_record_played_at", table_name="play_record")
    op.drop_index("ix_play_record_user_id", table_name="play_record")
    op.drop_table("play_record")
