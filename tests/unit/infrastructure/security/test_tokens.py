"""Tests for TokenService."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from songcatalog.config import AuthSettings
from songcatalog.domain.exceptions import AuthenticationError
from songcatalog.infrastructure.security import TokenClaims, TokenService


@pytest.fixture
def auth() -> AuthSettings:
    return AuthSettings(secret="s" * 32, issuer="songcatalog-test", expires_minutes=5)


@pytest.fixture
def tokens(auth: AuthSettings) -> TokenService:
    return TokenService(auth)


def _sign(auth: AuthSettings, **claims: object) -> str:
    payload: dict[str, object] = {
        "sub": "admin",
        "roles": ["admin"],
        "iss": auth.issuer,
        "exp": datetime.now(UTC) + timedelta(minutes=1),
    }
    payload.update(claims)
    return jwt.encode(payload, auth.secret, algorithm=auth.algorithm)


class TestCreateToken:

    def test_round_trip(self, tokens: TokenService) -> None:
        issued = tokens.create_token("admin", ["admin", "employee"])

        claims = tokens.decode_token(issued.token)

        assert claims.username == "admin"
        assert claims.roles == ("admin", "employee")
        assert claims.expires_at > datetime.now(UTC)

    def test_lifetime_from_settings(self, tokens: TokenService) -> None:
        issued = tokens.create_token("admin", ())

        assert issued.expires_in == 300
        assert issued.roles == ()

    def test_claims_are_signed_with_issuer(self, tokens: TokenService, auth: AuthSettings) -> None:
        issued = tokens.create_token("employee", ["employee"])

        payload = jwt.decode(issued.token, auth.secret, algorithms=["HS256"], issuer=auth.issuer)

        assert payload["sub"] == "employee"
        assert payload["roles"] == ["employee"]
        assert payload["exp"] - payload["iat"] == 300


class TestDecodeToken:

    def test_expired(self, tokens: TokenService, auth: AuthSettings) -> None:
        token = _sign(auth, exp=datetime.now(UTC) - timedelta(seconds=10))

        with pytest.raises(AuthenticationError, match="Token expired"):
            tokens.decode_token(token)

    def test_wrong_secret(self, tokens: TokenService) -> None:
        other = TokenService(AuthSettings(secret="x" * 32, issuer="songcatalog-test"))
        token = other.create_token("admin", ["admin"]).token

        with pytest.raises(AuthenticationError, match="Invalid token"):
            tokens.decode_token(token)

    def test_wrong_issuer(self, tokens: TokenService, auth: AuthSettings) -> None:
        with pytest.raises(AuthenticationError, match="Invalid token"):
            tokens.decode_token(_sign(auth, iss="someone-else"))

    def test_missing_subject(self, tokens: TokenService, auth: AuthSettings) -> None:
        token = jwt.encode(
            {"roles": ["admin"], "iss": auth.issuer, "exp": datetime.now(UTC) + timedelta(minutes=1)},
            auth.secret,
            algorithm=auth.algorithm,
        )

        with pytest.raises(AuthenticationError):
            tokens.decode_token(token)

    def test_roles_not_a_list(self, tokens: TokenService, auth: AuthSettings) -> None:
        with pytest.raises(AuthenticationError, match="Invalid token"):
            tokens.decode_token(_sign(auth, roles="admin"))

    def test_missing_roles_means_none(self, tokens: TokenService, auth: AuthSettings) -> None:
        token = _sign(auth)
        payload = jwt.decode(token, auth.secret, algorithms=["HS256"], issuer=auth.issuer)
        del payload["roles"]

        claims = tokens.decode_token(jwt.encode(payload, auth.secret, algorithm="HS256"))

        assert claims.roles == ()

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_garbage(self, tokens: TokenService, token: str) -> None:
        with pytest.raises(AuthenticationError):
            tokens.decode_token(token)


class TestTokenClaims:

    @pytest.mark.parametrize(
        ("roles", "wanted", "expected"),
        [
            (("admin", "employee"), ("admin",), True),
            (("employee",), ("admin", "employee"), True),
            (("employee",), ("admin",), False),
            ((), ("admin",), False),
        ],
    )
    def test_has_any_role(
        self, roles: tuple[str, ...], wanted: tuple[str, ...], expected: bool
    ) -> None:
        claims = TokenClaims(username="u", roles=roles, expires_at=datetime.now(UTC))

        assert claims.has_any_role(*wanted) is expected
