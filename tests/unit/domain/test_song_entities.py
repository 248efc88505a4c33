"""Tests for the Song and Artist entities."""

from datetime import date

import pytest

from songcatalog.domain.entities import (
    MERGEABLE_FIELDS,
    SONG_FIELDS,
    Artist,
    Song,
    SongKind,
)
from songcatalog.domain.exceptions import ValidationException


class TestSongInvariants:
    """Construction-time validation."""

    def test_minimal_song(self) -> None:
        song = Song(title="Imagine")
        assert song.id is None
        assert song.version is None
        assert song.keywords == []
        assert song.artists == []

    @pytest.mark.parametrize("title", ["", "   "])
    def test_empty_title_rejected(self, title: str) -> None:
        with pytest.raises(ValidationException):
            Song(title=title)

    @pytest.mark.parametrize("rating", [-1, 6])
    def test_rating_out_of_range_rejected(self, rating: int) -> None:
        with pytest.raises(ValidationException, match="rating"):
            Song(title="Imagine", rating=rating)

    @pytest.mark.parametrize("rating", [0, 5])
    def test_rating_bounds_accepted(self, rating: int) -> None:
        assert Song(title="Imagine", rating=rating).rating == rating

    @pytest.mark.parametrize("keyword", ["rock, roll", "", "  "])
    def test_unstorable_keyword_rejected(self, keyword: str) -> None:
        with pytest.raises(ValidationException, match="keyword"):
            Song(title="Imagine", keywords=["blues", keyword])

    def test_artist_name_required(self) -> None:
        with pytest.raises(ValidationException):
            Artist(name=" ")


class TestSongFields:
    """The legal search field names."""

    def test_artists_not_searchable(self) -> None:
        assert "artists" not in SONG_FIELDS

    def test_scalar_fields_searchable(self) -> None:
        assert set(SONG_FIELDS) == {
            "id",
            "version",
            "rating",
            "kind",
            "release_date",
            "keywords",
            "title",
            "created_at",
            "updated_at",
        }

    def test_kind_values(self) -> None:
        assert SongKind("CD") is SongKind.CD
        assert SongKind.MP3.value == "MP3"


class TestSongMerge:
    """Song.merge() applies content fields only."""

    @pytest.fixture
    def persisted(self) -> Song:
        return Song(
            id=7,
            version=3,
            title="Imagine",
            rating=5,
            kind=SongKind.CD,
            release_date=date(1971, 10, 11),
            keywords=["classic"],
            artists=[Artist(id=1, name="John Lennon")],
        )

    def test_content_fields_taken_over(self, persisted: Song) -> None:
        changes = Song(title="Imagine (Remastered)", rating=4, kind=SongKind.MP3, keywords=["pop"])

        merged = persisted.merge(changes)

        assert merged.title == "Imagine (Remastered)"
        assert merged.rating == 4
        assert merged.kind is SongKind.MP3
        assert merged.keywords == ["pop"]

    def test_unset_fields_keep_stored_value(self, persisted: Song) -> None:
        merged = persisted.merge(Song(title="Imagine", rating=4))

        assert merged.kind is SongKind.CD
        assert merged.release_date == date(1971, 10, 11)

    def test_identity_version_and_artists_never_merged(self, persisted: Song) -> None:
        changes = Song(id=99, version=42, title="Other", artists=[Artist(name="Someone")])

        merged = persisted.merge(changes)

        assert merged.id == 7
        assert merged.version == 3
        assert [a.name for a in merged.artists] == ["John Lennon"]

    def test_merge_returns_copy(self, persisted: Song) -> None:
        merged = persisted.merge(Song(title="Changed"))
        assert persisted.title == "Imagine"
        assert merged is not persisted

    def test_mergeable_fields_exclude_server_fields(self) -> None:
        assert not {"id", "version", "created_at", "updated_at", "artists"} & set(
            MERGEABLE_FIELDS
        )
