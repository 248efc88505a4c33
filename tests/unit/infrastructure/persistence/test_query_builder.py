"""Tests for SongQueryBuilder.

Hey future me - these compile the statements instead of running them, so they pin down
the SQL SHAPE: bound parameters only, lower()/ILIKE for title, tag criteria on keywords.
"""

from datetime import date

import pytest
from sqlalchemy import Select
from sqlalchemy.dialects import postgresql, sqlite

from songcatalog.domain.entities import KEYWORD_SEPARATOR
from songcatalog.infrastructure.persistence.query_builder import (
    INTEGER_MAX,
    INTEGER_MIN,
    TAG_CRITERIA,
    SongQueryBuilder,
    fits_integer_column,
    keywords_from_column,
    keywords_to_column,
)


def _compile(stmt: Select, dialect=None):  # type: ignore[no-untyped-def]
    return stmt.compile(dialect=dialect or sqlite.dialect())


@pytest.fixture
def builder() -> SongQueryBuilder:
    return SongQueryBuilder()


class TestBuildCriteria:
    """Criteria -> WHERE clause."""

    def test_empty_criteria_select_all_ordered_by_id(self, builder: SongQueryBuilder) -> None:
        stmt = builder.build({})

        assert stmt.whereclause is None
        assert "ORDER BY songs.id" in str(_compile(stmt))

    def test_title_is_case_insensitive_substring(self, builder: SongQueryBuilder) -> None:
        compiled = _compile(builder.build({"title": "Mountain"}))

        sql = str(compiled)
        assert "lower(songs.title) LIKE" in sql
        assert "Mountain" not in sql
        assert "Mountain" in compiled.params.values()

    def test_title_uses_ilike_on_postgres(self, builder: SongQueryBuilder) -> None:
        sql = str(_compile(builder.build({"title": "a"}), postgresql.dialect()))
        assert "songs.title ILIKE" in sql

    def test_title_wildcards_are_escaped(self, builder: SongQueryBuilder) -> None:
        compiled = _compile(builder.build({"title": "100%_sure"}))

        assert "ESCAPE" in str(compiled)
        assert "100/%/_sure" in compiled.params.values()

    def test_injection_attempt_stays_a_parameter(self, builder: SongQueryBuilder) -> None:
        payload = "x'; DROP TABLE songs; --"
        compiled = _compile(builder.build({"title": payload}))

        assert "DROP TABLE" not in str(compiled)
        assert payload in compiled.params.values()

    def test_integer_field_is_coerced(self, builder: SongQueryBuilder) -> None:
        compiled = _compile(builder.build({"rating": "5"}))

        assert "songs.rating = ?" in str(compiled)
        assert 5 in compiled.params.values()

    def test_kind_and_date_are_coerced(self, builder: SongQueryBuilder) -> None:
        compiled = _compile(builder.build({"kind": "MP3", "release_date": "1965-09-13"}))

        params = list(compiled.params.values())
        assert "MP3" in params
        assert date(1965, 9, 13) in params

    def test_criteria_are_conjunctive(self, builder: SongQueryBuilder) -> None:
        sql = str(_compile(builder.build({"rating": 5, "title": "a"})))
        assert " AND " in sql

    @pytest.mark.parametrize(
        ("key", "value"),
        [("rating", "five"), ("rating", True), ("kind", "VINYL"), ("release_date", "yesterday")],
    )
    def test_uncoercible_value_raises_value_error(
        self, builder: SongQueryBuilder, key: str, value: object
    ) -> None:
        with pytest.raises(ValueError):
            builder.build({key: value})

    @pytest.mark.parametrize("key", ["id", "version", "rating"])
    @pytest.mark.parametrize("value", [INTEGER_MAX + 1, str(INTEGER_MIN - 1), "99999999999999999999"])
    def test_integer_out_of_column_range_raises_value_error(
        self, builder: SongQueryBuilder, key: str, value: object
    ) -> None:
        with pytest.raises(ValueError, match="out of range"):
            builder.build({key: value})

    def test_unknown_key_raises_key_error(self, builder: SongQueryBuilder) -> None:
        with pytest.raises(KeyError):
            builder.build({"password": "secret"})

    def test_artists_key_not_supported(self, builder: SongQueryBuilder) -> None:
        assert "artists" not in builder.supported_keys


class TestTagCriteria:
    """rock/pop pseudo-criteria."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "True"])
    def test_true_adds_keyword_predicate(self, builder: SongQueryBuilder, value: str) -> None:
        compiled = _compile(builder.build({"rock": value}))

        assert "lower(songs.keywords) LIKE" in str(compiled)
        assert "ROCK" in compiled.params.values()

    @pytest.mark.parametrize("value", ["false", "", "yes"])
    def test_other_values_add_nothing(self, builder: SongQueryBuilder, value: str) -> None:
        assert builder.build({"pop": value}).whereclause is None

    def test_tags_are_fixed(self) -> None:
        assert dict(TAG_CRITERIA) == {"rock": "ROCK", "pop": "POP"}


class TestLookups:
    """By-id/by-title/artist name statements."""

    def test_build_id_binds_id(self, builder: SongQueryBuilder) -> None:
        compiled = _compile(builder.build_id(42))
        assert "songs.id = ?" in str(compiled)
        assert 42 in compiled.params.values()

    def test_build_id_does_not_inner_join_artists(self, builder: SongQueryBuilder) -> None:
        assert "JOIN" not in str(_compile(builder.build_id(1)))

    def test_build_title_is_exact(self, builder: SongQueryBuilder) -> None:
        sql = str(_compile(builder.build_title("Yesterday")))
        assert "songs.title = ?" in sql
        assert "LIKE" not in sql

    def test_build_artist_names(self, builder: SongQueryBuilder) -> None:
        sql = str(_compile(builder.build_artist_names(["Queen", "Nirvana"])))
        assert "artists.name IN" in sql


class TestKeywordsColumn:
    """Comma-separated keywords column."""

    def test_roundtrip_keeps_order(self) -> None:
        assert keywords_from_column(keywords_to_column(["ROCK", "POP"])) == ["ROCK", "POP"]

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_column(self, raw: str | None) -> None:
        assert keywords_from_column(raw) == []

    def test_separator_is_comma(self) -> None:
        assert keywords_to_column(["ROCK", "POP"]) == f"ROCK{KEYWORD_SEPARATOR}POP"


@pytest.mark.parametrize(
    ("value", "fits"),
    [(0, True), (INTEGER_MAX, True), (INTEGER_MIN, True), (INTEGER_MAX + 1, False), (INTEGER_MIN - 1, False)],
)
def test_fits_integer_column(value: int, fits: bool) -> None:
    assert fits_integer_column(value) is fits
