"""Token endpoint: trade username and password for a bearer token."""

import logging

from fastapi import APIRouter, Depends

from songcatalog.api.dependencies import get_auth_service
from songcatalog.api.schemas import LoginRequest, TokenResponse
from songcatalog.application.services import AuthService
from songcatalog.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Log in. 401 for an unknown user or a wrong password."""
    issued = auth_service.login(credentials.username, credentials.password)
    if issued is None:
        raise AuthenticationError("Wrong username or password")

    return TokenResponse(
        access_token=issued.token, expires_in=issued.expires_in, roles=list(issued.roles)
    )
