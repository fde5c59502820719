"""Authentication exceptions.

These exceptions are raised by the bookshelf_auth package and should be
caught and translated by the application layer (SessionManager,
IdentityService).
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a token is invalid, expired, forged, or malformed.

    The message is deliberately identical for every cause.
    """

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class SessionCacheError(AuthError):
    """Raised when the session cache cannot be reached or fails a command."""

    def __init__(self, message: str = "Session cache unavailable"):
        super().__init__(message)
