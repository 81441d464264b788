"""Client-side exceptions for collaborator failures."""

from typing import Optional


class FoodingoError(Exception):
    """Base exception for client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ApiError(FoodingoError):
    """Request to the remote API failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        server_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.server_message = server_message


class ApiAuthError(ApiError):
    """The API rejected the bearer token (or none was sent)."""


class ApiConnectionError(ApiError):
    """The API could not be reached."""


class ApiTimeoutError(ApiConnectionError):
    """The API did not answer within the configured timeout."""


class StorageError(FoodingoError):
    """Reading or writing the key-value store failed."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key
