"""Error types raised by the auth flows.

Each error carries the HTTP status and the client-facing detail; main.py
turns any MarketplaceError into a JSON ``{"detail": ...}`` response.
"""


class MarketplaceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, status_code: int | None = None) -> None:
        self.detail = detail or self.default_detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class ValidationError(MarketplaceError):
    """Request data is well-formed JSON but not acceptable."""

    status_code = 422
    default_detail = "Invalid request"


class PasswordTooLongError(ValidationError):
    default_detail = "Password must be at most 72 bytes"


class ConflictError(MarketplaceError):
    """A uniqueness invariant would be violated."""

    status_code = 409
    default_detail = "User with this email already exists"


class AuthError(MarketplaceError):
    """Caller could not be authenticated."""

    status_code = 401
    default_detail = "Unauthorized"


class InvalidCredentialsError(AuthError):
    default_detail = "Invalid credentials"


class EmailNotConfirmedError(AuthError):
    default_detail = "Email not confirmed"


class InvalidTokenError(AuthError):
    """Signature mismatch, expiry and malformed payloads all map here."""

    default_detail = "Invalid token"


class MissingTokenError(AuthError):
    default_detail = "Missing or malformed token"


class NotFoundError(MarketplaceError):
    status_code = 404
    default_detail = "User not found"


class InternalError(MarketplaceError):
    """Store, network or data-integrity failure. Details stay server-side."""

    status_code = 500
    default_detail = "Internal server error"


class NotificationError(InternalError):
    default_detail = "Failed to send email"


class MalformedHashError(InternalError):
    default_detail = "Stored password hash is malformed"


class ConfirmationError(InternalError):
    """Confirmation link carried an unusable token."""

    default_detail = "Error: Invalid token"
