"""Exception classes for gcsbench."""


class GcsBenchError(Exception):
    """Base error for gcsbench."""


class ValidationError(GcsBenchError):
    """Raised when arguments are invalid, before any request is sent."""


class ProtocolError(GcsBenchError):
    """Raised when the storage service replies in an unexpected way."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize ProtocolError.

        Args:
            message: Description of the violation, including the offending
                status or header text.
            status_code: HTTP status code of the response, if any.
        """
        super().__init__(message)
        self.status_code = status_code


class ConfigError(GcsBenchError):
    """Raised when configuration values cannot be parsed."""


class AuthenticationError(GcsBenchError):
    """Raised when default credentials cannot be loaded."""
