class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when the caller cannot be authenticated."""

    status_code = 401


class AuthenticationMissing(AuthenticationError):
    """No credential was presented."""


class AuthenticationInvalid(AuthenticationError):
    """The credential is malformed, tampered with or expired, or the login was wrong."""


class NotFoundError(DomainError):
    """Raised when a resource does not exist or is not owned by the caller."""

    status_code = 404
