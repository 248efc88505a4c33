"""SQLAlchemy ORM models for songcatalog."""

from datetime import UTC, date, datetime

import sqlalchemy as sa
from sqlalchemy import ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# Hey future me, utc_now() ensures ALL timestamps are UTC! Never use datetime.now() without
# timezone - that's "naive" datetime and causes bugs when servers are in different timezones.
def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


# Hey future me - SQLite doesn't preserve timezone info! Stored UTC datetimes come back
# "naive". Use this before comparing DB datetimes with datetime.now(UTC).
def ensure_utc_aware(dt: datetime) -> datetime:
    """Ensure datetime is UTC-aware, assuming naive datetimes are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


# Versions start at 0 (not SQLAlchemy's default of 1) and move up by exactly one per UPDATE.
def next_version(current: int | None) -> int:
    """Version generator for the optimistic lock column."""
    return 0 if current is None else current + 1


class Base(DeclarativeBase):
    """Base class for all ORM models.

    All models inherit from this to use the same metadata registry.
    """

    pass


# Listen up, SongModel carries the OPTIMISTIC LOCK! version_id_col makes SQLAlchemy emit
# "UPDATE songs ... WHERE id = :id AND version = :loaded_version" and bump the column itself.
# If somebody else committed first, zero rows match and the flush raises StaleDataError -
# that's the storage-level "one writer wins" guarantee. Never assign model.version by hand!
# keywords is a comma-separated string (no JSON/ARRAY so SQLite, Postgres and MySQL all work).
class SongModel(Base):
    """SQLAlchemy model for the Song aggregate."""

    __tablename__ = "songs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    kind: Mapped[str | None] = mapped_column(String(3), nullable=True)
    release_date: Mapped[date | None] = mapped_column(sa.Date, nullable=True)
    keywords: Mapped[str | None] = mapped_column(Text, nullable=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    # Artists are OWNED: cascade="all, delete-orphan" plus ondelete=CASCADE on the FK.
    # The write service still deletes them explicitly inside its transaction.
    artists: Mapped[list["ArtistModel"]] = relationship(
        "ArtistModel",
        back_populates="song",
        cascade="all, delete-orphan",
        order_by="ArtistModel.id",
    )

    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": next_version,
    }

    __table_args__ = (sa.Index("ix_songs_title_lower", func.lower(title)),)


class ArtistModel(Base):
    """SQLAlchemy model for an Artist owned by a song."""

    __tablename__ = "artists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    song_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("songs.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    # Back reference for query convenience only - the song owns the artist, not vice versa.
    song: Mapped["SongModel | None"] = relationship("SongModel", back_populates="artists")
