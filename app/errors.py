"""Exceptions raised by the backend services."""
from typing import Optional


class CatalogError(Exception):
    """The catalog backend rejected a request or could not be reached."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class SlugConflictError(CatalogError):
    """The backend refused a slug that is already used by another entity."""


class AuthError(Exception):
    """Login against the auth backend failed."""


class NotAuthenticatedError(Exception):
    """No usable session: the user must log in again."""
