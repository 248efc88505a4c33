"""JWT bearer tokens for the write endpoints.

Hey future me - tokens are HS256-signed with AUTH__SECRET and carry the caller's roles in a
"roles" claim. Verification checks signature, expiry and issuer; anything wrong with a token
becomes an AuthenticationError (401), never a 500.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from songcatalog.config import AuthSettings
from songcatalog.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed token."""

    token: str
    expires_in: int
    roles: tuple[str, ...]


@dataclass(frozen=True)
class TokenClaims:
    """The verified content of a token."""

    username: str
    roles: tuple[str, ...]
    expires_at: datetime

    def has_any_role(self, *roles: str) -> bool:
        """True if the token carries at least one of ``roles``."""
        return any(role in self.roles for role in roles)


class TokenService:
    """Signs and verifies JWTs."""

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    def create_token(self, username: str, roles: list[str] | tuple[str, ...]) -> IssuedToken:
        """Sign a token for ``username`` with ``roles``."""
        now = datetime.now(UTC)
        lifetime = timedelta(minutes=self._settings.expires_minutes)
        payload: dict[str, Any] = {
            "sub": username,
            "roles": list(roles),
            "iss": self._settings.issuer,
            "iat": now,
            "exp": now + lifetime,
        }
        token = jwt.encode(payload, self._settings.secret, algorithm=self._settings.algorithm)
        logger.debug("create_token: username=%s roles=%s", username, roles)
        return IssuedToken(
            token=token, expires_in=int(lifetime.total_seconds()), roles=tuple(roles)
        )

    def decode_token(self, token: str) -> TokenClaims:
        """Verify ``token`` and return its claims.

        Raises:
            AuthenticationError: bad signature, expired, wrong issuer or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[self._settings.algorithm],
                issuer=self._settings.issuer,
                options={"require": ["sub", "exp", "iss"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug("decode_token: rejected: %s", e)
            raise AuthenticationError("Invalid token") from e

        roles = payload.get("roles", [])
        if not isinstance(roles, list):
            raise AuthenticationError("Invalid token")
        return TokenClaims(
            username=payload["sub"],
            roles=tuple(str(role) for role in roles),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )
