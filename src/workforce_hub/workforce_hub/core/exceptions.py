class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCredentialsError(DomainError):
    """Raised when login credentials are invalid.

    The message is fixed so callers cannot tell an unknown email from a wrong password.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when an operation references an id absent from the store."""


class ConflictError(DomainError):
    """Raised when an update was based on a stale version of an entity."""


class ExternalServiceError(DomainError):
    """Raised by external collaborators; always recovered before reaching callers."""
