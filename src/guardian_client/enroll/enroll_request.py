"""A request to enroll this device as a Guardian second factor."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..api import APIClient, Enrollment
from ..crypto import SigningKey, VerificationKey
from ..networking import ErrorHook, Failure, GuardianRequest, InvalidEnrollmentUri, RequestHook, ResponseHook, Result, Success
from .enrolled_device import EnrolledDevice
from .ticket import NoTicket, TicketResolution, resolve_ticket

EnrollCallback = Callable[[Result[EnrolledDevice]], None]


@dataclass(frozen=True)
class PendingEnrollment:
    """A resolved ticket turned into a network call that has not run yet."""

    call: GuardianRequest[Enrollment]

    @property
    def description(self) -> str:
        return self.call.description

    @property
    def debug_description(self) -> str:
        return self.call.debug_description


@dataclass(frozen=True)
class FailedEnrollment:
    """Ticket resolution failed; starting yields `cause` without any I/O."""

    method: str
    url: str
    cause: InvalidEnrollmentUri

    @property
    def description(self) -> str:
        return f"{self.method} {self.url}"

    @property
    def debug_description(self) -> str:
        return f"{self.description}\nError: {self.cause}"


EnrollmentState = Union[PendingEnrollment, FailedEnrollment]


class EnrollRequest:
    """Enrolls a device and maps the server response into an `EnrolledDevice`.

    The ticket is resolved once at construction: an explicit
    `enrollment_ticket` wins, otherwise the `enrollment_tx_id` of
    `enrollment_uri` is used. When neither yields a ticket, `start` reports
    `InvalidEnrollmentUri` immediately and nothing is sent.

    Each instance runs once. The callback fires exactly once, on the transport
    worker thread or on the API client's `callback_executor`. Dropping the
    request after `start` does not cancel it; the callback still fires.
    """

    def __init__(
        self,
        api: APIClient,
        enrollment_ticket: Optional[str] = None,
        enrollment_uri: Optional[str] = None,
        *,
        notification_token: str,
        verification_key: VerificationKey,
        signing_key: SigningKey,
        device_identifier: Optional[str] = None,
        device_name: Optional[str] = None,
    ):
        self._notification_token = notification_token
        self._signing_key = signing_key
        self._callback_executor = api.callback_executor
        self._lock = threading.Lock()
        self._started = False

        self.resolution: TicketResolution = resolve_ticket(enrollment_ticket, enrollment_uri)

        if isinstance(self.resolution, NoTicket):
            self._state: EnrollmentState = FailedEnrollment(
                method="POST",
                url=api.url_for(api.enrollment_endpoint),
                cause=InvalidEnrollmentUri(f"Invalid enrollment: {self.resolution.reason}"),
            )
            return

        self._state = PendingEnrollment(
            api.enroll(
                ticket=self.resolution.ticket,
                identifier=device_identifier or EnrolledDevice.vendor_identifier(),
                name=device_name or EnrolledDevice.device_name(),
                notification_token=notification_token,
                verification_key=verification_key,
            )
        )

    @property
    def state(self) -> EnrollmentState:
        return self._state

    @property
    def description(self) -> str:
        return self._state.description

    @property
    def debug_description(self) -> str:
        return self._state.debug_description

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"<EnrollRequest {self.description}>"

    def on(
        self,
        request: Optional[RequestHook] = None,
        response: Optional[ResponseHook] = None,
        error: Optional[ErrorHook] = None,
    ) -> EnrollRequest:
        """Register hooks to be called on specific events.

        Hooks fire for request sent, response received (successful or not)
        and network error. A request that failed ticket resolution never
        touches the network, so its hooks never fire.

        Returns:
            itself for chaining
        """
        if isinstance(self._state, PendingEnrollment):
            self._state.call.on(request=request, response=response, error=error)
        return self

    def start(self, callback: EnrollCallback) -> None:
        """Execute the enrollment in a background thread.

        Args:
            callback: termination callback, receives the `Result` exactly once

        Raises:
            RuntimeError: If the request was already started
        """
        self._mark_started()

        if isinstance(self._state, FailedEnrollment):
            self._deliver(callback, Failure(self._state.cause))
            return

        self._state.call.start(lambda result: callback(self._map_outcome(result)))

    def execute(self) -> Result[EnrolledDevice]:
        """Execute the enrollment on the calling thread and return its result."""
        self._mark_started()

        if isinstance(self._state, FailedEnrollment):
            return Failure(self._state.cause)

        return self._map_outcome(self._state.call.execute())

    def _mark_started(self) -> None:
        with self._lock:
            if self._started:
                raise RuntimeError(f"Enrollment already started: {self.description}")
            self._started = True

    def _deliver(self, callback: EnrollCallback, result: Result[EnrolledDevice]) -> None:
        if self._callback_executor is not None:
            self._callback_executor.submit(callback, result)
        else:
            callback(result)

    def _map_outcome(self, result: Result[Enrollment]) -> Result[EnrolledDevice]:
        if isinstance(result, Failure):
            return result

        payload = result.payload
        return Success(
            EnrolledDevice(
                id=payload.id,
                user_id=payload.user_id,
                device_token=payload.token,
                notification_token=self._notification_token,
                signing_key=self._signing_key,
                totp=payload.totp,
            )
        )
