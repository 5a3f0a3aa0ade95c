"""Custom exception classes for the DJ requests service.

Each error carries the HTTP status the API boundary answers with, so routers
can turn any of them into a structured JSON response without a lookup table.
"""


class RequestServiceError(Exception):
    """Base exception for all request service errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(RequestServiceError):
    """Raised when caller input is missing or malformed. No network call is made."""

    status_code = 400


class ConfigurationError(RequestServiceError):
    """Raised when the deployment is misconfigured."""

    status_code = 500


class TransportError(RequestServiceError):
    """Raised when an upstream service cannot be reached."""

    status_code = 502


class UpstreamError(RequestServiceError):
    """Raised when an upstream service answers with a failure status."""

    status_code = 502

    def __init__(self, message: str, status: int, details: dict | None = None):
        self.status = status
        super().__init__(message, details={"status": status, **(details or {})})


class RateLimitedError(UpstreamError):
    """Raised when an upstream service rejects us with 429."""

    status_code = 503
