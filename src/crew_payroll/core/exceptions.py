class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when caller arguments are invalid (bad period, negative threshold, ...)."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or job site does not exist."""


class DataSourceError(DomainError):
    """Raised when the attendance/employee store cannot be read."""
