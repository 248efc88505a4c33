"""Login: check credentials against the configured accounts and issue a token."""

import hmac
import logging

from songcatalog.config import AuthSettings, UserAccount
from songcatalog.infrastructure.security import IssuedToken, TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Service for logging in with username and password."""

    def __init__(self, settings: AuthSettings, token_service: TokenService) -> None:
        """Initialize auth service.

        Args:
            settings: Auth section with the known accounts
            token_service: Signs the token of a successful login
        """
        self._settings = settings
        self._token_service = token_service

    def _find_account(self, username: str) -> UserAccount | None:
        return next((u for u in self._settings.users if u.username == username), None)

    def login(self, username: str, password: str) -> IssuedToken | None:
        """Issue a token for valid credentials.

        Returns:
            The signed token, or None for an unknown user or a wrong password
        """
        account = self._find_account(username)
        if account is None or not hmac.compare_digest(
            account.password.encode(), password.encode()
        ):
            logger.info("Login failed for user %r", username)
            return None

        logger.info("Login succeeded for user %r", username)
        return self._token_service.create_token(account.username, account.roles)
