class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Raised when a write lost a race or hit a unique key (zero rows affected)."""


class DataSourceError(DomainError):
    """Raised when the store could not be reached or a query failed."""
