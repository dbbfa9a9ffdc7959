class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class InvalidInput(DomainError):
    """Raised when input data is missing or violates domain rules."""


class RecordNotFound(DomainError):
    """Raised when a looked-up record does not exist."""

    http_status = 404


class AlreadyCheckedIn(DomainError):
    """Raised when an attendance record already exists for the employee and date."""

    http_status = 409


class NotCheckedIn(DomainError):
    """Raised on checkout when no check-in exists for the employee and date."""


class AlreadyCheckedOut(DomainError):
    """Raised on checkout when the record is already checked out."""

    http_status = 409


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    http_status = 403
