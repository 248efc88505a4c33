"""Application settings loaded from environment variables and .env files."""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database connection settings."""

    url: str = Field(
        default="sqlite+aiosqlite:///./songcatalog.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(default=False, description="Log every SQL statement")
    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    pool_recycle: int = Field(default=3600, ge=-1)
    pool_pre_ping: bool = True
    # Hey future me - populate=True WIPES the song tables on startup and loads the seed
    # songs! Only for dev/test containers, never turn this on against real data.
    populate: bool = Field(
        default=False, description="Drop, recreate and seed the tables at startup"
    )


class MailSettings(BaseModel):
    """SMTP settings for the song-created notification."""

    enabled: bool = Field(default=False, description="Send notification mails")
    host: str = "smtp"
    port: int = Field(default=25, ge=1, le=65535)
    sender: str = "songcatalog@localhost"
    recipient: str = "admin@localhost"
    timeout: float = Field(default=10.0, gt=0)


class UserAccount(BaseModel):
    """A login known to the token endpoint."""

    username: str
    password: str
    roles: list[str] = Field(default_factory=list)


# Hey future me - the default accounts and secret are for dev stacks only! Production sets
# AUTH__SECRET and AUTH__USERS (JSON list) in the environment.
class AuthSettings(BaseModel):
    """JWT signing and login settings."""

    secret: str = Field(
        default="songcatalog-dev-secret-change-me-0123456789",
        min_length=32,
        description="HMAC secret for signing tokens",
    )
    algorithm: str = "HS256"
    issuer: str = "songcatalog"
    expires_minutes: int = Field(default=60, ge=1)
    users: list[UserAccount] = Field(
        default_factory=lambda: [
            UserAccount(username="admin", password="p", roles=["admin", "employee"]),
            UserAccount(username="employee", password="p", roles=["employee"]),
            UserAccount(username="user", password="p", roles=[]),
        ]
    )


class ObservabilityConfig(BaseModel):
    """Logging and observability settings."""

    log_json_format: bool = Field(
        default=False, description="Emit JSON logs (recommended in production)"
    )


class Settings(BaseSettings):
    """Root settings object.

    Nested sections are read from env vars with ``__`` as delimiter, e.g.
    ``DATABASE__URL``, ``MAIL__ENABLED`` or ``AUTH__SECRET``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = "songcatalog"
    debug: bool = False
    log_level: str = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    mail: MailSettings = Field(default_factory=MailSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    def _get_sqlite_db_path(self) -> Path | None:
        """Return the SQLite database file path, or None for other backends."""
        url = self.database.url
        if not url.startswith("sqlite"):
            return None
        _, _, path = url.partition(":///")
        if not path or path == ":memory:" or "mode=memory" in path:
            return None
        return Path(path.split("?", 1)[0])


# Hey future me - this is the ONLY place that reads the environment! create_app() calls it
# once when no Settings were passed in and hangs the result on app.state.settings. Everything
# else gets its settings section handed in through constructors or Depends(get_app_settings).
@lru_cache
def get_settings() -> Settings:
    """Build settings from the environment (cached)."""
    return Settings()
