"""Session context holding the bearer token.

Lifecycle: ``load()`` on startup reads the persisted token, ``set_token()``
after a successful login, ``clear()`` on logout or when the store rejects the
token. The store client receives the session explicitly and reads the token
on every request.
"""

import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger


class TokenStore:
    """Durable token storage in a small JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return None

        token = data.get("token") if isinstance(data, dict) else None
        return token or None

    def write(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token}), encoding="utf-8")
        try:
            self.path.chmod(0o600)
        except OSError:
            logger.debug(f"Could not restrict permissions on {self.path}")

    def delete(self) -> None:
        # Concurrent 401s may both clear the session
        self.path.unlink(missing_ok=True)


class Session:
    """Authentication state shared by the store client and auth service."""

    def __init__(self, store: Optional[TokenStore] = None):
        """Initialize an empty session.

        Args:
            store: Durable token store; None keeps the token in memory only
        """
        self.store = store
        self.token: Optional[str] = None
        self.user: Optional[dict[str, Any]] = None
        self.error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def load(self) -> Optional[str]:
        """Restore the persisted token, if any."""
        if self.store is not None:
            self.token = self.store.read()
        if self.token:
            logger.debug("Restored session token")
        return self.token

    def set_token(self, token: str) -> None:
        self.token = token
        self.error = None
        if self.store is not None:
            self.store.write(token)

    def set_user(self, user: Optional[dict[str, Any]]) -> None:
        self.user = user

    def clear(self, reason: Optional[str] = None) -> None:
        """Drop token and user; ``reason`` is kept for display."""
        self.token = None
        self.user = None
        self.error = reason
        if self.store is not None:
            self.store.delete()
        if reason:
            logger.warning(f"Session cleared: {reason}")
        else:
            logger.info("Session cleared")

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
