class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a credential cannot be resolved to a subject."""


class PermissionDenied(DomainError):
    """Raised when the authorization guard rejects an action."""


class NotFound(DomainError):
    """Raised when a referenced account or record does not exist."""


class StorageError(DomainError):
    """Raised when the backing store fails (usually transient)."""
