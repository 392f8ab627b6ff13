"""Exceptions raised by the service layer."""


class CatalogAdminError(Exception):
    """Base class for all catalog-admin errors."""


class TransportError(CatalogAdminError):
    """Request never produced a usable response (connection, timeout, bad JSON)."""


class RemoteError(CatalogAdminError):
    """Store answered with ``success: false`` or an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(RemoteError):
    """Token missing, expired or rejected; the session has been cleared."""


class SectionValidationError(CatalogAdminError):
    """Section failed the save gate; no request was sent."""

    def __init__(self, section_id: str, reason: str):
        super().__init__(f"Section '{section_id}' cannot be saved: {reason}")
        self.section_id = section_id
        self.reason = reason
