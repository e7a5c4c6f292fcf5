"""
Application error taxonomy.

Services raise these; ``api.errors`` turns them into JSON responses with a
stable status code.  Messages are safe to show to API callers.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for every error the API reports on purpose."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationFailedError(AppError):
    status_code = 400
    code = "validation_failed"
    default_message = "Request validation failed"

    def __init__(
        self,
        errors: List[Dict[str, str]],
        message: Optional[str] = None,
    ):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailedError":
        return cls([{"field": field, "message": message}])

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class ConflictError(AppError):
    status_code = 400
    code = "conflict"
    default_message = "Resource conflicts with existing data"


class UnauthorizedError(AppError):
    status_code = 401
    code = "unauthorized"
    default_message = "Access denied. No token provided."


class InvalidTokenError(AppError):
    status_code = 401
    code = "invalid_token"
    default_message = "Invalid or expired token"


class ForbiddenError(AppError):
    status_code = 403
    code = "forbidden"
    default_message = "Operation not allowed for this user"


class InvalidCredentialsError(AppError):
    status_code = 400
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"

    def __init__(self, resource: str = "Resource", message: Optional[str] = None):
        super().__init__(message or f"{resource} not found")
        self.resource = resource


class GeocodeNotFoundError(AppError):
    status_code = 404
    code = "geocode_not_found"
    default_message = "Address not found by the geocoding service"


class UpstreamUnavailableError(AppError):
    status_code = 502
    code = "upstream_unavailable"
    default_message = "Geocoding service is unavailable"


class InternalFailureError(AppError):
    pass
