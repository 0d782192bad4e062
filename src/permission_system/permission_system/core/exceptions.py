from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the API layer answers with.
    """

    status_code = 400

    def __init__(self, message: str, *, errors: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when credentials or the bearer token are missing or invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when the caller's role is not allowed to perform an action."""

    status_code = 403


class ForbiddenError(DomainError):
    """Raised when the caller does not own a record or its status forbids the action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Raised when the action conflicts with the record's current state."""

    status_code = 409


class DuplicateEmailError(ConflictError):
    def __init__(self, message: str, *, status_code: int = 409):
        super().__init__(message)
        self.status_code = status_code
