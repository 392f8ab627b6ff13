"""Login, current-user lookup and logout against the store's auth endpoints."""

from typing import Any, Optional

from loguru import logger

from catalog_admin.api.client import SESSION_EXPIRED, StoreClient
from catalog_admin.auth.session import Session
from catalog_admin.errors import AuthenticationError


class AuthService:
    """Drives the session lifecycle through the store client."""

    def __init__(self, client: StoreClient, session: Session):
        self.client = client
        self.session = session

    def restore(self) -> Optional[dict[str, Any]]:
        """Restore a persisted session and verify it with ``auth/me``.

        Returns:
            Current user, or None when no valid token is stored
        """
        if not self.session.load():
            return None

        result = self.client.get("auth/me")
        if not result.success:
            # A rejected token must not survive a restart
            if self.session.is_authenticated:
                self.session.clear(SESSION_EXPIRED)
            return None

        self.session.set_user(result.data)
        return result.data

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate and store the returned bearer token.

        Args:
            email: Account email
            password: Account password

        Returns:
            Current user record from ``auth/me``

        Raises:
            ValueError: If credentials are empty
            AuthenticationError: If the store rejects the credentials
        """
        if not email or not password:
            raise ValueError("Email and password are required")

        logger.info(f"Logging in as {email}")
        result = self.client.post(
            "auth/login", {"email": email, "password": password}, clear_on_401=False
        )

        token = result.data.get("token") if isinstance(result.data, dict) else None
        if not result.success or not token:
            message = result.error or "Login failed"
            self.session.error = message
            raise AuthenticationError(message, result.status_code)

        self.session.set_token(token)

        me = self.client.get("auth/me")
        if not me.success:
            self.session.clear(me.error or SESSION_EXPIRED)
            raise AuthenticationError(me.error or "Login failed", me.status_code)

        self.session.set_user(me.data)
        logger.success(f"Logged in as {email}")
        return me.data

    def logout(self) -> None:
        self.session.clear()
