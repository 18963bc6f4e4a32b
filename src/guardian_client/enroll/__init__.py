"""Enrollment package: ticket resolution, the enroll request and the enrolled device."""

from .enroll_request import EnrollRequest, FailedEnrollment, PendingEnrollment
from .enrolled_device import EnrolledDevice
from .ticket import NoTicket, ResolvedTicket, TicketSource, enrollment_ticket_from_uri, parameters_from_uri, resolve_ticket

__all__ = [
    "EnrollRequest",
    "EnrolledDevice",
    "FailedEnrollment",
    "NoTicket",
    "PendingEnrollment",
    "ResolvedTicket",
    "TicketSource",
    "enrollment_ticket_from_uri",
    "parameters_from_uri",
    "resolve_ticket",
]
