"""Dashboard API client layer -- re-exports the primary client classes."""

from admin_client.api.client import AdminClient
from admin_client.api.errors import ApiError, AuthExpiredError

__all__ = ["AdminClient", "ApiError", "AuthExpiredError"]
