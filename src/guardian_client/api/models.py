"""Pydantic models for the enrollment wire format."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EnrollmentRequest(BaseModel):
    """Body of `POST /api/enroll`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ticket: str = Field(..., min_length=1, description="Enrollment ticket authorizing this attempt")
    identifier: str = Field(..., description="Stable device identifier")
    name: str = Field(..., description="Human readable device name")
    notification_token: str = Field(..., description="Push notification token of the device")
    public_key: Dict[str, Any] = Field(..., description="Verification key as a JSON Web Key")


class OTPParameters(BaseModel):
    """TOTP parameters issued by the server on enrollment."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    secret: str = Field(..., repr=False, description="Base32 encoded shared secret")
    algorithm: str = Field(default="sha1", description="HMAC algorithm")
    digits: int = Field(default=6, gt=0, description="Number of digits per code")
    period: int = Field(default=30, gt=0, description="Code validity in seconds")

    @field_validator("algorithm", mode="before")
    @classmethod
    def normalize_algorithm(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v


class Enrollment(BaseModel):
    """Response of a successful enrollment.

    Identifier fields are required but not otherwise validated; `totp` is
    absent when the tenant has TOTP disabled.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Server issued enrollment identifier")
    user_id: str = Field(..., description="Identifier of the enrolled user")
    token: str = Field(..., description="Device token used to authenticate later calls")
    totp: Optional[OTPParameters] = Field(None, description="TOTP parameters, if enabled")
