"""The device record produced by a successful enrollment."""

from __future__ import annotations

import socket
import uuid
from dataclasses import dataclass, field
from typing import Optional

from ..api.models import OTPParameters
from ..crypto import SigningKey


@dataclass(frozen=True)
class EnrolledDevice:
    """A device enrolled as a Guardian second factor.

    Holds everything needed for later operations: the server identity of the
    enrollment, the device token, the TOTP parameters and the private signing
    key. Secrets are excluded from the repr.
    """

    id: str
    user_id: str
    device_token: str = field(repr=False)
    notification_token: str = field(repr=False)
    signing_key: SigningKey = field(repr=False)
    totp: Optional[OTPParameters] = field(default=None, repr=False)

    @staticmethod
    def vendor_identifier() -> str:
        """Stable identifier of this machine, derived from hostname and hardware address."""
        return str(uuid.uuid5(uuid.NAMESPACE_DNS, f"{socket.gethostname()}-{uuid.getnode():012x}"))

    @staticmethod
    def device_name() -> str:
        return socket.gethostname()
