"""Entry points for enrolling a device with a Guardian server."""

from __future__ import annotations

from concurrent.futures import Executor
from typing import Optional

from .api import APIClient
from .config import GuardianConfig, get_current_config
from .crypto import SigningKey, VerificationKey
from .enroll import EnrollRequest


def api_client(
    base_url: Optional[str] = None,
    config: Optional[GuardianConfig] = None,
    callback_executor: Optional[Executor] = None,
) -> APIClient:
    """Create an API client from explicit arguments or the current configuration.

    Args:
        base_url: Base URL of the Guardian server, overrides the configuration
        config: Configuration to use (defaults to the loaded one, then env)
        callback_executor: Executor request callbacks are marshaled to

    Raises:
        ValueError: If no usable base URL is available
    """
    config = config or get_current_config() or GuardianConfig()
    base_url = base_url or config.base_url
    if not base_url:
        raise ValueError("A Guardian base URL is required (argument, config or GUARDIAN_BASE_URL)")
    return APIClient(
        base_url=base_url,
        timeout_seconds=config.timeout_seconds,
        user_agent=config.user_agent,
        callback_executor=callback_executor,
    )


def enroll(
    *,
    notification_token: str,
    signing_key: SigningKey,
    verification_key: VerificationKey,
    enrollment_uri: Optional[str] = None,
    enrollment_ticket: Optional[str] = None,
    base_url: Optional[str] = None,
    config: Optional[GuardianConfig] = None,
    callback_executor: Optional[Executor] = None,
) -> EnrollRequest:
    """Create a request to enroll this device.

    Device identifier and name come from the configuration when set there,
    otherwise they are detected from the host.

    Example::

        signing_key, verification_key = generate_key_pair()
        request = guardian.enroll(
            base_url="https://tenant.guardian.auth0.com",
            enrollment_uri=scanned_uri,
            notification_token=push_token,
            signing_key=signing_key,
            verification_key=verification_key,
        )
        request.start(on_enrolled)
    """
    config = config or get_current_config() or GuardianConfig()
    return EnrollRequest(
        api_client(base_url=base_url, config=config, callback_executor=callback_executor),
        enrollment_ticket=enrollment_ticket,
        enrollment_uri=enrollment_uri,
        notification_token=notification_token,
        verification_key=verification_key,
        signing_key=signing_key,
        device_identifier=config.device_identifier or None,
        device_name=config.device_name or None,
    )
