"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from kotoba.exceptions import AuthenticationError
from kotoba.infrastructure.identity.auth.token_service import verify_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> int:
    """
    Get the ID of the authenticated user from the access token.

    The token is issued by the identity service; only its signature, expiry
    and subject are checked here.

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    user_id = verify_access_token(credentials.credentials)
    if user_id is None or user_id <= 0:
        raise AuthenticationError()
    return user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
