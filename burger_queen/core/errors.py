"""Domain errors raised by the authorization policy and services.

Each carries the HTTP status it maps to; the application turns them into
``{"error": message}`` JSON responses.
"""


class PolicyError(Exception):
    """Base class for errors recovered at the handler boundary."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PolicyError):
    """Missing or empty required fields."""

    status_code = 400


class AuthorizationError(PolicyError):
    """Caller lacks rights for the operation."""

    status_code = 403


class NotFoundError(PolicyError):
    """Target does not resolve to a record."""

    status_code = 404


class ConflictError(PolicyError):
    """Email already taken by another user. Reported as 403."""

    status_code = 403
