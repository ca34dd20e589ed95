"""Cross-platform path management for admin-client.

Persistent file locations live here so the credential store and the CLI
share one canonical set of paths.  Directory creation is deferred to
helpers rather than happening at import time, keeping imports
side-effect-free.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from platformdirs import user_config_dir

APP_NAME = "admin-client"

CONFIG_DIR: Path = Path(user_config_dir(APP_NAME))

# Durable credential entries (the "remember me" store).
CREDENTIALS_FILE = CONFIG_DIR / "credentials.json"


def ensure_parents(path: Path) -> Path:
    """Create all parent directories for *path* if they do not exist.

    Returns *path* unchanged so the call can be used inline.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, data: Union[str, bytes]) -> None:
    """Write *data* to *path* atomically (write-to-tmp then replace).

    The file is created with owner-only (0600) permissions.
    """
    payload = data if isinstance(data, bytes) else data.encode("utf-8")
    tmp = ensure_parents(path.with_suffix(path.suffix + ".tmp"))

    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        os.write(fd, payload)
    finally:
        os.close(fd)

    try:
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
