"""Guardian API client and wire models."""

from .api_client import APIClient
from .models import Enrollment, EnrollmentRequest, OTPParameters

__all__ = ["APIClient", "Enrollment", "EnrollmentRequest", "OTPParameters"]
