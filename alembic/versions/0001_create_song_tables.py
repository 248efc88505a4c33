"""Create songs and artists tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Hey future me – songs.version is the optimistic lock column. The ORM (version_id_col)
sets it to 0 on insert and bumps it by one per UPDATE, so no server default here!
artists.song_id cascades on delete; the write service deletes artists explicitly anyway.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create songs and artists tables."""
    op.create_table(
        "songs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("rating", sa.Integer, nullable=True),
        sa.Column("kind", sa.String(3), nullable=True),
        sa.Column("release_date", sa.Date, nullable=True),
        # Comma-separated: "ROCK,POP"
        sa.Column("keywords", sa.Text, nullable=True),
        sa.Column("title", sa.String(255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    # Title search is lower(title) LIKE lower(:param)
    op.create_index("ix_songs_title_lower", "songs", [sa.text("lower(title)")])

    op.create_table(
        "artists",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(32), nullable=False, unique=True),
        sa.Column(
            "song_id",
            sa.Integer,
            sa.ForeignKey("songs.id", ondelete="CASCADE"),
            nullable=True,
        ),
    )
    op.create_index("ix_artists_song_id", "artists", ["song_id"])


def downgrade() -> None:
    """Drop artists and songs tables."""
    op.drop_index("ix_artists_song_id", table_name="artists")
    op.drop_table("artists")
    op.drop_index("ix_songs_title_lower", table_name="songs")
    op.drop_table("songs")
