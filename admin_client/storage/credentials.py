"""Durable storage for the access token, refresh token and user identity.

Two physical stores back the credentials, mirroring how the dashboard keeps
a session: a *persistent* JSON file in the platform config directory (see
:data:`paths.CREDENTIALS_FILE`), used when the user asks to be remembered,
and an in-memory *session* store that disappears with the process.

Each store holds plain string entries under the keys below.  The
``isLoggedIn`` flag is written for compatibility with the other dashboard
clients but is never trusted: a session is authenticated iff an access
token is present.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from loguru import logger

from ..models.auth import CredentialRecord, StorageType
from .paths import CREDENTIALS_FILE, atomic_write, ensure_parents

AUTH_TOKEN_KEY = "auth_token"
AUTH_REFRESH_TOKEN_KEY = "refresh_token"
AUTH_USER_KEY = "user"
IS_LOGGED_IN_KEY = "isLoggedIn"

ALL_KEYS = (IS_LOGGED_IN_KEY, AUTH_TOKEN_KEY, AUTH_REFRESH_TOKEN_KEY, AUTH_USER_KEY)

_UNSET: Any = object()


class KeyValueStore(Protocol):
    """Minimal string key/value interface shared by both physical stores."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    """Process-lifetime store, the equivalent of browser session storage."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStore:
    """JSON-file backed store that survives restarts.

    The file is re-read on every access so several processes sharing the
    same config directory observe each other's logins and logouts.  All
    writes go through :func:`atomic_write`.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or CREDENTIALS_FILE

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except Exception as exc:
            logger.warning(f"Failed to load credentials from {self.path}: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed credentials file {self.path}")
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self, items: dict[str, str]) -> None:
        if not items:
            self._delete()
            return
        ensure_parents(self.path)
        atomic_write(self.path, json.dumps(items, indent=2))

    def _delete(self) -> None:
        try:
            if self.path.exists():
                self.path.unlink()
                logger.debug(f"Credentials deleted from {self.path}")
        except OSError as exc:
            logger.error(f"Failed to delete credentials at {self.path}: {exc}")

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)


def _safe_parse_json(value: str | None) -> Any:
    if not value:
        return None
    try:
        return json.loads(value)
    except ValueError:
        return value


def _non_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _copy_entries(source: KeyValueStore, target: KeyValueStore) -> None:
    for key in ALL_KEYS:
        value = source.get_item(key)
        if value is None:
            target.remove_item(key)
        else:
            target.set_item(key, value)


class CredentialStore:
    """Single source of truth for the client's authentication state.

    Parameters
    ----------
    persistent:
        Store used when ``remember=True`` (defaults to a :class:`FileStore`).
    session:
        Store used when ``remember=False`` (defaults to a :class:`MemoryStore`).
    """

    def __init__(
        self,
        persistent: KeyValueStore | None = None,
        session: KeyValueStore | None = None,
    ) -> None:
        self.persistent: KeyValueStore = persistent or FileStore()
        self.session: KeyValueStore = session or MemoryStore()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _stores(self) -> tuple[tuple[StorageType, KeyValueStore], ...]:
        return (("persistent", self.persistent), ("session", self.session))

    @staticmethod
    def _read(store: KeyValueStore, storage_type: StorageType) -> CredentialRecord:
        user_raw = store.get_item(AUTH_USER_KEY)
        return CredentialRecord(
            access_token=store.get_item(AUTH_TOKEN_KEY) or None,
            refresh_token=store.get_item(AUTH_REFRESH_TOKEN_KEY) or None,
            user=_safe_parse_json(user_raw),
            storage_type=storage_type,
        )

    def get(self) -> CredentialRecord:
        """Return the current credentials; never raises.

        The persistent store wins over the session store.  A store holding
        an access token always wins over one that only holds leftovers
        (a refresh token or a user without a token).
        """
        fallback: CredentialRecord | None = None
        for storage_type, store in self._stores():
            record = self._read(store, storage_type)
            if record.access_token:
                return record
            if fallback is None and (record.refresh_token or record.user is not None):
                fallback = record
        return fallback or CredentialRecord()

    def is_authenticated(self) -> bool:
        """Return ``True`` iff an access token is stored."""
        return self.get().is_authenticated

    def _active_store(self) -> KeyValueStore:
        current = self.get().storage_type
        return self.session if current == "session" else self.persistent

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def set(
        self,
        access_token: str | None = None,
        user: Any = _UNSET,
        remember: bool | None = None,
    ) -> None:
        """Persist whatever is provided, leaving omitted fields untouched.

        ``remember`` selects the physical store.  Choosing one explicitly
        wipes the other store so it cannot shadow the session.  When the
        other store held the current session, its entries are copied over
        first so omitted fields survive the switch.  ``None`` keeps writing
        to the store that holds the current session.
        """
        if remember is None:
            target = self._active_store()
        else:
            target = self.persistent if remember else self.session
            other = self.session if remember else self.persistent
            if self._active_store() is other:
                _copy_entries(other, target)
            for key in ALL_KEYS:
                other.remove_item(key)

        if _non_blank(access_token):
            target.set_item(AUTH_TOKEN_KEY, access_token)
            target.set_item(IS_LOGGED_IN_KEY, "true")

        if user is not _UNSET:
            target.set_item(
                AUTH_USER_KEY, user if isinstance(user, str) else json.dumps(user)
            )
        logger.debug("Credentials updated")

    def set_refresh_token(self, token: str | None) -> None:
        """Persist a non-blank refresh token next to the current session."""
        if not _non_blank(token):
            return
        self._active_store().set_item(AUTH_REFRESH_TOKEN_KEY, token)
        logger.debug("Refresh token updated")

    def clear(self) -> None:
        """Remove every credential entry from both stores; idempotent."""
        for _, store in self._stores():
            for key in ALL_KEYS:
                store.remove_item(key)
        logger.debug("Credentials cleared")
