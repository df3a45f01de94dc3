"""
Bearer tokens identifying the learner behind a request.

Tokens are issued by the identity service sharing ``SECRET_KEY``; this
service only needs to read the user id back out of them. ``create_access_token``
exists for that service's tooling and for tests.
"""

from datetime import UTC, datetime, timedelta

import jwt

from kotoba.config import get_settings

ALGORITHM = "HS256"
TOKEN_TYPE = "access"


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    issued_at = datetime.now(UTC)
    expires_at = issued_at + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    claims = {"sub": str(user_id), "type": TOKEN_TYPE, "iat": issued_at, "exp": expires_at}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> int | None:
    """Return the user id of a valid, unexpired access token, else None."""
    try:
        claims = jwt.decode(
            token,
            get_settings().SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError:
        return None

    subject = claims["sub"]
    if claims.get("type") != TOKEN_TYPE or not str(subject).isdigit():
        return None
    return int(subject)
