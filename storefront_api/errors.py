# storefront_api/errors.py
"""
Domain-level exceptions.

Services raise these; ``storefront_api.main`` registers a handler that turns
any ``DomainError`` into the ``{"success": false, "message": ...}`` envelope
with the matching HTTP status.
"""

from typing import Any, Mapping, Optional


class DomainError(Exception):
    """Base class for all domain-level exceptions."""

    status_code = 500

    def __init__(self, message: str, *, details: Optional[Mapping[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


# --- Client errors ---

class ValidationError(DomainError):
    """Malformed or missing input, rejected before any side effect."""

    status_code = 400


class AuthError(DomainError):
    """Missing, invalid or expired session."""

    status_code = 401


class ForbiddenError(DomainError):
    """Authenticated, but the role does not allow the operation."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Duplicate email, category still referenced by products, and so on."""

    status_code = 409


# --- Server errors ---

class ServiceUnavailableError(DomainError):
    """An optional collaborator is not configured."""

    status_code = 503


class InternalError(DomainError):
    """Unexpected store or collaborator failure."""

    status_code = 500


__all__ = [
    "DomainError",
    "ValidationError",
    "AuthError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ServiceUnavailableError",
    "InternalError",
]
