"""The normalised error shape every caller of :class:`AdminClient` sees."""

from __future__ import annotations

from typing import Any

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."
NO_REFRESH_TOKEN_MESSAGE = "No refresh token available. Please login again."
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."


class ApiError(Exception):
    """A failed API call.

    ``status`` is the HTTP status code, or ``0`` when no response was
    received.  ``data`` carries the parsed error payload when there is one.
    """

    def __init__(self, message: str, status: int = 0, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status={self.status})"


class AuthExpiredError(ApiError):
    """Raised when the session cannot be renewed and the user must log in again."""

    def __init__(self, message: str = SESSION_EXPIRED_MESSAGE, data: Any = None) -> None:
        super().__init__(message, status=401, data=data)
