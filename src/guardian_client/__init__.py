"""Guardian Client - device enrollment for push-notification multi-factor authentication."""

from . import guardian
from .config import get_config_manager, setup_logging
from .crypto import generate_key_pair
from .enroll import EnrolledDevice, EnrollRequest
from .networking import Failure, GuardianError, InvalidEnrollmentUri, Result, Success

__version__ = "1.0.0"

__all__ = [
    "EnrollRequest",
    "EnrolledDevice",
    "Failure",
    "GuardianError",
    "InvalidEnrollmentUri",
    "Result",
    "Success",
    "generate_key_pair",
    "get_config_manager",
    "guardian",
    "setup_logging",
]
