from typing import Optional


class NewsFetchError(Exception):
    """Raised when a page of news cannot be fetched from the source."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(NewsFetchError):
    """Raised when the source rejects the configured credentials (401/403)."""


class TransportError(NewsFetchError):
    """Raised on any other non-success response or network failure."""


def error_for_status(status_code: int, message: str) -> NewsFetchError:
    if status_code in (401, 403):
        return AuthError(message, status_code)
    return TransportError(message, status_code)
