"""Token issuing and verification."""

from songcatalog.infrastructure.security.tokens import IssuedToken, TokenClaims, TokenService

__all__ = ["IssuedToken", "TokenClaims", "TokenService"]
