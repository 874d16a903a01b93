"""Domain errors raised by the service layer.

The HTTP layer maps them to status codes in :mod:`todo_api.api`.
"""

from __future__ import annotations

from typing import Dict, Optional


class ValidationError(ValueError):
    """Client input rejected before any store mutation."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors: Dict[str, str] = dict(errors or {})


class NotFoundError(LookupError):
    """Raised when a requested document does not exist."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message)
        self.message = message


class AuthenticationError(Exception):
    """Raised when a session token is missing, forged or no longer stored."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
        self.message = message
