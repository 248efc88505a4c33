"""Tests for application startup and shutdown."""

from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi import FastAPI

from songcatalog.config import DatabaseSettings, Settings
from songcatalog.domain.exceptions import ConfigurationError
from songcatalog.infrastructure.lifecycle import _validate_sqlite_path, lifespan


def _settings(url: str, populate: bool = False) -> Settings:
    return Settings(_env_file=None, database=DatabaseSettings(url=url, populate=populate))


class TestValidateSqlitePath:
    """Test SQLite directory checks before engine creation."""

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        db_file = tmp_path / "nested" / "dir" / "songs.db"

        _validate_sqlite_path(_settings(f"sqlite+aiosqlite:///{db_file}"))

        assert db_file.parent.is_dir()
        assert list(db_file.parent.iterdir()) == []

    def test_ignores_non_sqlite(self) -> None:
        _validate_sqlite_path(_settings("postgresql+asyncpg://u:p@db/songs"))

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        settings = _settings(f"sqlite+aiosqlite:///{tmp_path / 'songs.db'}")

        with patch.object(Path, "write_bytes", side_effect=PermissionError("read-only")):
            with pytest.raises(ConfigurationError, match="write permissions"):
                _validate_sqlite_path(settings)


class TestLifespan:
    """Test the lifespan context manager."""

    async def test_creates_and_closes_database(self, tmp_path: Path) -> None:
        app = FastAPI()
        app.state.settings = _settings(f"sqlite+aiosqlite:///{tmp_path / 'songs.db'}")

        with patch("songcatalog.infrastructure.lifecycle.configure_logging"):
            async with lifespan(app):
                assert await app.state.db.check_connection()

        assert (tmp_path / "songs.db").exists()

    async def test_populates_when_enabled(self, tmp_path: Path) -> None:
        app = FastAPI()
        app.state.settings = _settings(
            f"sqlite+aiosqlite:///{tmp_path / 'songs.db'}", populate=True
        )

        with (
            patch("songcatalog.infrastructure.lifecycle.configure_logging"),
            patch("songcatalog.infrastructure.lifecycle.populate_database") as mock_populate,
        ):
            async with lifespan(app):
                pass

        mock_populate.assert_awaited_once_with(app.state.db)
