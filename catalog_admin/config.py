"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_TOKEN_FILE = Path.home() / ".config" / "catalog-admin" / "session.json"


@dataclass
class AdminConfig:
    """Configuration for the store client and session."""

    api_url: str = DEFAULT_API_URL
    token_file: Path = DEFAULT_TOKEN_FILE
    timeout: float = 30.0  # seconds
    email: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)


def load_config(
    api_url: Optional[str] = None,
    token_file: Optional[str] = None,
    timeout: Optional[float] = None,
) -> AdminConfig:
    """Build configuration from arguments, falling back to environment variables.

    Args:
        api_url: Base URL of the content API (CATALOG_ADMIN_API_URL)
        token_file: Path of the persisted session token (CATALOG_ADMIN_TOKEN_FILE)
        timeout: Request timeout in seconds (CATALOG_ADMIN_TIMEOUT)

    Returns:
        Populated AdminConfig

    Raises:
        ValueError: If CATALOG_ADMIN_TIMEOUT is not a number
    """
    env_timeout = os.getenv("CATALOG_ADMIN_TIMEOUT")
    if timeout is None and env_timeout:
        try:
            timeout = float(env_timeout)
        except ValueError:
            raise ValueError(
                f"CATALOG_ADMIN_TIMEOUT must be a number, got {env_timeout!r}"
            ) from None

    token_path = token_file or os.getenv("CATALOG_ADMIN_TOKEN_FILE")

    return AdminConfig(
        api_url=(api_url or os.getenv("CATALOG_ADMIN_API_URL") or DEFAULT_API_URL).rstrip("/"),
        token_file=Path(token_path).expanduser() if token_path else DEFAULT_TOKEN_FILE,
        timeout=timeout if timeout is not None else 30.0,
        email=os.getenv("CATALOG_ADMIN_EMAIL"),
        password=os.getenv("CATALOG_ADMIN_PASSWORD"),
    )
