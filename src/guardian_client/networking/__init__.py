"""Networking primitives: results, errors and the HTTP transport."""

from .errors import GuardianError, InvalidEnrollmentUri, InvalidResponse, NetworkError, ServerError, TransportError
from .hooks import log_request_hooks
from .request import GuardianRequest
from .requestable import ErrorHook, Requestable, RequestHook, ResponseHook
from .result import Failure, Result, Success

__all__ = [
    "ErrorHook",
    "Failure",
    "GuardianError",
    "GuardianRequest",
    "InvalidEnrollmentUri",
    "InvalidResponse",
    "NetworkError",
    "RequestHook",
    "Requestable",
    "ResponseHook",
    "Result",
    "ServerError",
    "Success",
    "TransportError",
    "log_request_hooks",
]
