"""Criteria-to-query translation for song searches.

Hey future me - this is where client input turns into SQL, so the rules are strict:
1. Every criterion key maps to ONE predicate factory in a closed dispatch table.
   No getattr(SongModel, key) reflection - a key that is not in the table is a bug
   upstream (SongReadService whitelists keys before calling us) and raises KeyError.
2. Every value ends up as a BOUND parameter. Nothing from the client is ever
   formatted into the statement text.
3. Values are coerced to the column type first, so "5" compares as 5 on every backend.
   A value that can't be coerced raises ValueError.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from songcatalog.domain.entities import KEYWORD_SEPARATOR, SongKind
from songcatalog.infrastructure.persistence.models import ArtistModel, SongModel

logger = logging.getLogger(__name__)

# Pseudo-criteria: not song fields, "rock=true" means "keywords contain ROCK".
TAG_CRITERIA: Mapping[str, str] = {
    "rock": "ROCK",
    "pop": "POP",
}

# Integer columns are 32-bit on every backend we run on. Values outside never match a row,
# and the SQLite driver refuses to bind them at all.
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1

PredicateFactory = Callable[[Any], ColumnElement[bool] | None]


def keywords_to_column(keywords: list[str] | tuple[str, ...]) -> str:
    """Serialize keywords for the comma-separated keywords column."""
    return KEYWORD_SEPARATOR.join(keywords)


def keywords_from_column(raw: str | None) -> list[str]:
    """Deserialize the comma-separated keywords column, keeping order."""
    if not raw:
        return []
    return raw.split(KEYWORD_SEPARATOR)


def fits_integer_column(value: int) -> bool:
    """Whether ``value`` can be bound to an INTEGER column."""
    return INTEGER_MIN <= value <= INTEGER_MAX


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    number = int(value)
    if not fits_integer_column(number):
        raise ValueError(f"Integer out of range: {number}")
    return number


def _to_kind(value: Any) -> str:
    return SongKind(value).value


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _to_keywords(value: Any) -> str:
    if isinstance(value, list | tuple):
        return keywords_to_column(value)
    return str(value)


def _equals(
    column: InstrumentedAttribute[Any], coerce: Callable[[Any], Any]
) -> PredicateFactory:
    def factory(value: Any) -> ColumnElement[bool]:
        return column == coerce(value)

    return factory


# Case-insensitive substring match. icontains() renders lower(col) LIKE lower(:param) on
# backends without ILIKE, and autoescape=True escapes % and _ in the client value so
# "100%" matches literally instead of acting as a wildcard.
def _title_contains(value: Any) -> ColumnElement[bool]:
    return SongModel.title.icontains(str(value), autoescape=True)


def _tag(tag: str) -> PredicateFactory:
    def factory(value: Any) -> ColumnElement[bool] | None:
        if str(value).lower() != "true":
            return None
        return SongModel.keywords.icontains(tag, autoescape=True)

    return factory


class SongQueryBuilder:
    """Builds SELECT statements for songs from ids or search criteria."""

    def __init__(self) -> None:
        """Set up the closed criterion dispatch table."""
        self._predicates: dict[str, PredicateFactory] = {
            "id": _equals(SongModel.id, _to_int),
            "version": _equals(SongModel.version, _to_int),
            "rating": _equals(SongModel.rating, _to_int),
            "kind": _equals(SongModel.kind, _to_kind),
            "release_date": _equals(SongModel.release_date, _to_date),
            "keywords": _equals(SongModel.keywords, _to_keywords),
            "created_at": _equals(SongModel.created_at, _to_datetime),
            "updated_at": _equals(SongModel.updated_at, _to_datetime),
            "title": _title_contains,
        }
        for key, tag in TAG_CRITERIA.items():
            self._predicates[key] = _tag(tag)

    @property
    def supported_keys(self) -> frozenset[str]:
        """All criterion keys this builder can translate."""
        return frozenset(self._predicates)

    def _base(self) -> Select[tuple[SongModel]]:
        # selectinload instead of an inner join: songs without artists must still be found,
        # and the artists arrive in one extra IN-query instead of N lazy loads.
        return select(SongModel).options(selectinload(SongModel.artists))

    def build_id(self, song_id: int) -> Select[tuple[SongModel]]:
        """Select one song by id, artists eagerly loaded."""
        return self._base().where(SongModel.id == song_id)

    def build_title(self, title: str) -> Select[tuple[SongModel]]:
        """Select a song by its exact title (uniqueness check)."""
        return self._base().where(SongModel.title == title)

    def build(self, criteria: Mapping[str, Any]) -> Select[tuple[SongModel]]:
        """Select songs matching ALL criteria, ordered by id.

        Args:
            criteria: Pre-validated criterion key -> raw value

        Returns:
            SELECT statement with one bound predicate per effective criterion

        Raises:
            KeyError: criterion key not in the dispatch table
            ValueError: value not coercible to the column type
        """
        logger.debug("build: criteria=%s", dict(criteria))
        stmt = self._base()
        for key, value in criteria.items():
            predicate = self._predicates[key](value)
            if predicate is not None:
                stmt = stmt.where(predicate)
        stmt = stmt.order_by(SongModel.id)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("build: sql=%s", stmt)
        return stmt

    def build_artist_names(self, names: list[str]) -> Select[tuple[str]]:
        """Select those of the given artist names that exist."""
        return select(ArtistModel.name).where(ArtistModel.name.in_(names))
