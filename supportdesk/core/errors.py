"""
Error taxonomy shared by services and routes.

Services raise these; ``supportdesk.main`` turns them into JSON responses
of the form ``{"detail": "..."}`` (plus ``redirect_to`` for not-found
errors that have a recovery page).
"""
from typing import Optional


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A required field is missing or empty. Raised before any remote call."""
    status_code = 422


class AuthError(AppError):
    """Bad credentials, duplicate sign-up, or a missing/invalid access token."""
    status_code = 401


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, message: str, redirect_to: Optional[str] = None):
        super().__init__(message)
        self.redirect_to = redirect_to


class RemoteOperationError(AppError):
    """A create/read/update/delete/upload against the backend failed. Never retried."""
    status_code = 502
