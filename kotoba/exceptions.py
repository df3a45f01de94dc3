"""Application-level exceptions that are not business rule failures."""


class KotobaError(Exception):
    """Base exception for all non-domain application errors."""

    code = "internal_error"

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(KotobaError):
    """Missing or invalid credentials."""

    code = "unauthorized"

    def __init__(self, message: str = "Could not validate credentials") -> None:
        """Initialize with message and 401 status code."""
        super().__init__(message, status_code=401)


class ServiceError(KotobaError):
    """Unexpected failure while serving a request, e.g. the database went away."""
