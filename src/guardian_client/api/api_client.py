"""Guardian API client building the network calls used by the requests."""

from __future__ import annotations

from concurrent.futures import Executor
from typing import Optional
from urllib.parse import urljoin

from ..config.settings import DEFAULT_USER_AGENT
from ..crypto import VerificationKey
from ..networking import GuardianRequest
from .models import Enrollment, EnrollmentRequest


class APIClient:
    """Builds `GuardianRequest`s against a Guardian server."""

    enrollment_endpoint = "api/enroll"

    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        callback_executor: Optional[Executor] = None,
    ):
        """Initialize the API client.

        Args:
            base_url: Base URL of the Guardian server (may include a path)
            timeout_seconds: Request timeout
            user_agent: User-Agent header sent with every request
            callback_executor: Executor request callbacks are marshaled to

        Raises:
            ValueError: If the base URL is not an http or https URL
        """
        if not base_url.startswith(("http://", "https://")):
            raise ValueError(f"Guardian base URL must use http or https: {base_url!r}")
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.callback_executor = callback_executor

    def url_for(self, path: str) -> str:
        """Resolve `path` below the base URL, keeping any base path."""
        return urljoin(f"{self.base_url}/", path)

    def enroll(
        self,
        ticket: str,
        identifier: str,
        name: str,
        notification_token: str,
        verification_key: VerificationKey,
    ) -> GuardianRequest[Enrollment]:
        """Build the pending `POST /api/enroll` call. Nothing is sent yet."""
        body = EnrollmentRequest(
            ticket=ticket,
            identifier=identifier,
            name=name,
            notification_token=notification_token,
            public_key=verification_key.jwk,
        )
        return GuardianRequest(
            method="POST",
            url=self.url_for(self.enrollment_endpoint),
            payload=body.model_dump(),
            headers={"User-Agent": self.user_agent},
            response_model=Enrollment,
            timeout_seconds=self.timeout_seconds,
            callback_executor=self.callback_executor,
        )
