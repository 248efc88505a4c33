"""Dev/test database population with seed songs.

Hey future me - this WIPES the song tables! It only runs when DATABASE__POPULATE=true
(see lifecycle). Handy for docker-compose dev stacks and manual API poking.
"""

import logging
from datetime import date

from songcatalog.infrastructure.persistence.database import Database
from songcatalog.infrastructure.persistence.models import ArtistModel, SongModel

logger = logging.getLogger(__name__)

SEED_SONGS: list[dict] = [
    {
        "title": "Ain't No Mountain High Enough",
        "rating": 5,
        "kind": "CD",
        "release_date": date(1967, 4, 20),
        "keywords": "SOUL,POP",
        "artists": ["Marvin Gaye", "Tammi Terrell"],
    },
    {
        "title": "Yesterday",
        "rating": 4,
        "kind": "CD",
        "release_date": date(1965, 9, 13),
        "keywords": "POP",
        "artists": ["The Beatles"],
    },
    {
        "title": "Bohemian Rhapsody",
        "rating": 5,
        "kind": "MP3",
        "release_date": date(1975, 10, 31),
        "keywords": "ROCK",
        "artists": ["Queen"],
    },
    {
        "title": "Smells Like Teen Spirit",
        "rating": 4,
        "kind": "MP3",
        "release_date": date(1991, 9, 10),
        "keywords": "ROCK,GRUNGE",
        "artists": ["Nirvana"],
    },
    {
        "title": "Billie Jean",
        "rating": 3,
        "kind": "CD",
        "release_date": date(1983, 1, 2),
        "keywords": "POP",
        "artists": ["Michael Jackson"],
    },
]


async def populate_database(db: Database) -> int:
    """Drop, recreate and seed the song tables.

    Returns:
        Number of seeded songs
    """
    logger.warning("Database is being repopulated: %s", db.settings.url)
    await db.drop_tables()
    await db.create_tables()

    async with db.session_scope() as session:
        for seed in SEED_SONGS:
            session.add(
                SongModel(
                    title=seed["title"],
                    rating=seed["rating"],
                    kind=seed["kind"],
                    release_date=seed["release_date"],
                    keywords=seed["keywords"],
                    artists=[ArtistModel(name=name) for name in seed["artists"]],
                )
            )

    logger.warning("Database repopulated with %d songs", len(SEED_SONGS))
    return len(SEED_SONGS)
