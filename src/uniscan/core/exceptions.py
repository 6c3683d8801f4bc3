"""Closed set of error kinds.

Every ``DomainError`` carries a stable ``code`` the HTTP layer renders, so
callers branch on the kind instead of matching message strings.
"""


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"
    status_code = 400
    default_message = "Invalid input"


class DuplicateUsername(DomainError):
    code = "duplicate_username"
    status_code = 409
    default_message = "Username is already taken"


class InvalidCredentials(DomainError):
    """Raised for both unknown usernames and wrong passwords."""

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(DomainError):
    """Missing, invalid or expired token."""

    code = "unauthenticated"
    status_code = 401
    default_message = "Authentication required"


class TokenInvalid(Unauthenticated):
    default_message = "Invalid token"


class TokenExpired(Unauthenticated):
    default_message = "Token has expired"


class Forbidden(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"
    status_code = 403
    default_message = "You are not allowed to perform this action"


class AlreadyMarked(DomainError):
    code = "already_marked"
    status_code = 409
    default_message = "Attendance already marked today."


class StoreUnavailable(DomainError):
    code = "store_unavailable"
    status_code = 503
    default_message = "Storage is unavailable"


class UniquenessViolation(Exception):
    """Raised by repositories when an insert hits a unique key."""
