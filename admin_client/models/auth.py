"""Pydantic v2 models for credentials and authentication responses."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

StorageType = Literal["persistent", "session"]


class TokenBundle(BaseModel):
    """Tokens (and optional identity) extracted from a login or refresh response."""

    access_token: str
    refresh_token: str | None = None
    user: Any = None


class CredentialRecord(BaseModel):
    """Snapshot of the stored authentication state.

    ``storage_type`` names the physical store the record was read from, or
    ``None`` when nothing is stored.
    """

    access_token: str | None = None
    refresh_token: str | None = None
    user: Any = None
    storage_type: StorageType | None = None

    @property
    def is_authenticated(self) -> bool:
        """Return ``True`` if an access token is present."""
        return bool(self.access_token)
