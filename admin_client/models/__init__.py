"""Re-export the admin-client data models for convenient access."""

from admin_client.models.auth import CredentialRecord, StorageType, TokenBundle

__all__ = [
    "CredentialRecord",
    "StorageType",
    "TokenBundle",
]
