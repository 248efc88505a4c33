"""API schemas for login."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for the token endpoint."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """A signed bearer token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Lifetime in seconds")
    roles: list[str]
