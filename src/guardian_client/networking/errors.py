"""Error types surfaced through `Failure.cause`."""

from __future__ import annotations

from typing import Optional


class GuardianError(Exception):
    """Base exception for Guardian client errors."""


class InvalidEnrollmentUri(GuardianError):
    """Raised when no enrollment ticket can be resolved from the ticket or URI."""

    def __init__(self, message: str = "No valid enrollment ticket or otpauth URI supplied"):
        super().__init__(message)


class TransportError(GuardianError):
    """Base for any failure of the underlying network call."""


class ServerError(TransportError):
    """The server answered with a non-2xx status."""

    def __init__(self, status: int, code: Optional[str] = None, description: Optional[str] = None):
        self.status = status
        self.code = code
        self.description = description
        message = f"HTTP {status}"
        if code:
            message += f" ({code})"
        if description:
            message += f": {description}"
        super().__init__(message)


class NetworkError(TransportError):
    """The server could not be reached or did not answer in time."""

    def __init__(self, reason: object):
        self.reason = reason
        super().__init__(f"Network error: {reason}")


class InvalidResponse(TransportError):
    """A successful response whose body could not be decoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid response: {reason}")
