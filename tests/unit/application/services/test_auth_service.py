"""Tests for AuthService."""

import pytest

from songcatalog.application.services import AuthService
from songcatalog.config import AuthSettings, UserAccount
from songcatalog.infrastructure.security import TokenService


@pytest.fixture
def auth() -> AuthSettings:
    return AuthSettings(
        users=[
            UserAccount(username="admin", password="secret", roles=["admin", "employee"]),
            UserAccount(username="guest", password="guest"),
        ]
    )


@pytest.fixture
def service(auth: AuthSettings) -> AuthService:
    return AuthService(auth, TokenService(auth))


class TestLogin:

    def test_issues_token_with_account_roles(self, service: AuthService, auth: AuthSettings) -> None:
        issued = service.login("admin", "secret")

        assert issued is not None
        assert issued.roles == ("admin", "employee")
        claims = TokenService(auth).decode_token(issued.token)
        assert claims.username == "admin"

    def test_account_without_roles(self, service: AuthService) -> None:
        issued = service.login("guest", "guest")

        assert issued is not None
        assert issued.roles == ()

    @pytest.mark.parametrize(
        ("username", "password"),
        [("admin", "wrong"), ("admin", ""), ("ADMIN", "secret"), ("nobody", "secret")],
    )
    def test_rejected(self, service: AuthService, username: str, password: str) -> None:
        assert service.login(username, password) is None

    def test_non_ascii_password_rejected_not_raised(self, service: AuthService) -> None:
        assert service.login("admin", "sécret") is None
