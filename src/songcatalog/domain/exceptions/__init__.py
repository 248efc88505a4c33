"""Domain exceptions.

Hey future me - these are for INVARIANT violations and infrastructure failures only!
Expected business outcomes of the write path (title already taken, stale version, ...)
are NOT exceptions, they are typed result values from songcatalog.domain.errors.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, we store message as an attribute so code can inspect it without parsing str(exception).
    # Always raise a specific subclass so callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationException(DomainException):
    """Raised when entity validation fails.

    Used to signal that an entity's invariants have been violated
    (e.g., empty title, rating out of range).

    HTTP Status: 422
    """

    pass


class OptimisticLockException(DomainException):
    """Raised when the storage layer rejects a write because the row version moved on.

    This is the storage-level backstop behind the service-level version check: two
    writers that read the same version race, the second UPDATE matches zero rows.

    HTTP Status: 412
    """

    def __init__(self, entity_type: str, entity_id: Any, version: int | None) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} was modified concurrently "
            f"(expected version {version})"
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.version = version


class AuthenticationError(DomainException):
    """Caller is not authenticated or the token is invalid or expired.

    HTTP Status: 401
    """

    pass


class AuthorizationError(DomainException):
    """Caller is authenticated but lacks the role for this action.

    HTTP Status: 403
    """

    pass


class ConfigurationError(DomainException):
    """Application misconfiguration.

    Raised when required configuration is missing or invalid.

    HTTP Status: 503 (Service Unavailable)
    """

    pass


__all__ = [
    "DomainException",
    "EntityNotFoundException",
    "ValidationException",
    "OptimisticLockException",
    "ConfigurationError",
    "AuthenticationError",
    "AuthorizationError",
]
