"""
catalog_api.services.errors

Per-request failure taxonomy raised by the service layer.

Responsibilities:
- Name each caller-visible failure class and the HTTP status it maps to.
- Carry the violation list / message that becomes the response body.

None of these are retried and none are fatal to the process; the API layer
turns them into responses in `catalog_api.api.errors`.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_503_SERVICE_UNAVAILABLE,
)


class ServiceError(Exception):
    status_code: int = HTTP_400_BAD_REQUEST


class BadInput(ServiceError):
    """
    Malformed identifier, validation violations, disallowed fields or a
    uniqueness collision. `violations` renders as {"errors": [...]},
    `message` as {"error": "..."}; neither means an empty body.
    """

    status_code = HTTP_400_BAD_REQUEST

    def __init__(self, violations: list[str] | None = None, message: str | None = None) -> None:
        super().__init__(message or "; ".join(violations or []) or "bad input")
        self.violations = list(violations) if violations else None
        self.message = message


class Unauthenticated(ServiceError):
    status_code = HTTP_401_UNAUTHORIZED

    def __init__(self, reason: str = "invalid credentials") -> None:
        # `reason` is for logs only; responses never say which check failed.
        super().__init__(reason)
        self.reason = reason


class Forbidden(ServiceError):
    status_code = HTTP_403_FORBIDDEN


class NotFound(ServiceError):
    status_code = HTTP_404_NOT_FOUND


class Unavailable(ServiceError):
    status_code = HTTP_503_SERVICE_UNAVAILABLE
