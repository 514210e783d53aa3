"""ManyRows client exceptions."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import ErrorInfo


class ManyRowsError(Exception):
    """Base exception for ManyRows errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_info: "ErrorInfo | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_info = error_info


class ConnectionError(ManyRowsError):
    """The HTTP transport failed before a response was received."""

    pass


class ClientError(ManyRowsError):
    """The API rejected the request with a 4xx status."""

    pass


class ServerError(ManyRowsError):
    """The API answered with a 5xx or otherwise unexpected status."""

    pass


class DecodeError(ManyRowsError):
    """A response body or header could not be decoded."""

    pass
