"""Custom exception classes for the Lecture Reporting API.

Every error carries the HTTP status it maps to, so route handlers can raise
them directly and the application-level handler renders
``{"success": false, "message": ...}``.
"""


class LectureReportingError(Exception):
    """Base exception for all Lecture Reporting API errors."""

    status_code = 500

    def __init__(self, message: str):
        """Initialize the exception.

        Args:
            message: Human-readable message returned to the client.
        """
        self.message = message
        super().__init__(message)


class ValidationError(LectureReportingError):
    """Raised when a required field is missing or malformed."""

    status_code = 400


class PasswordTooLongError(ValidationError):
    """Raised when a password exceeds bcrypt's 72-byte input limit."""

    def __init__(self):
        super().__init__("Password must not exceed 72 bytes")


class UserAlreadyExistsError(ValidationError):
    """Raised when registering an email or student number that is taken."""

    pass


class AuthenticationError(LectureReportingError):
    """Raised when the caller could not be identified."""

    status_code = 401


class MissingTokenError(AuthenticationError):
    """Raised when a protected route is called without a token."""

    def __init__(self):
        super().__init__("No token provided")


class MalformedHeaderError(AuthenticationError):
    """Raised when the Authorization header is not ``Bearer <token>``."""

    def __init__(self):
        super().__init__("Malformed authorization header")


class InvalidCredentialsError(AuthenticationError):
    """Raised on login mismatch. Unknown user and wrong password look alike."""

    def __init__(self):
        super().__init__("Invalid credentials")


class AuthorizationError(LectureReportingError):
    """Raised when an identified caller may not perform the action."""

    status_code = 403


class InvalidTokenError(AuthorizationError):
    """Raised when a token has a bad signature, bad payload, or has expired."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class ForbiddenError(AuthorizationError):
    """Raised when the caller's role is not allowed on a route."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class AccountNotFoundError(AuthorizationError):
    """Raised when a token refers to an account that no longer exists."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__("Account no longer exists")


class NotFoundError(LectureReportingError):
    """Raised when a referenced row is absent or not visible to the caller."""

    status_code = 404

    def __init__(self, entity: str, entity_id):
        """Initialize the exception.

        Args:
            entity: Human-readable entity name, e.g. "Report".
            entity_id: The identifier that was not found.
        """
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class ConflictError(LectureReportingError):
    """Raised on a unique-constraint violation."""

    status_code = 409


class StoreError(LectureReportingError):
    """Raised when the backing store fails unexpectedly."""

    status_code = 500
