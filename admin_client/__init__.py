"""admin-client -- async client for the admin dashboard API."""

from admin_client.api import AdminClient, ApiError, AuthExpiredError

__version__ = "0.1.0"

__all__ = ["AdminClient", "ApiError", "AuthExpiredError", "__version__"]
