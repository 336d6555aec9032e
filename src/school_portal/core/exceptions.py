class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthError(DomainError):
    """Raised when login or signup cannot be completed.

    The message is shown to the user as-is.
    """


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataCorruptionError(DomainError):
    """Raised when persisted data does not have the expected shape."""


class RecordNotFoundError(DomainError, LookupError):
    """Raised when an id does not match any stored record."""
