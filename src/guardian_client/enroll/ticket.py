"""Enrollment ticket resolution.

A ticket is either given directly or embedded as the `enrollment_tx_id`
query parameter of an `otpauth://totp` URI, e.g.
`otpauth://totp/Tenant:user?secret=...&enrollment_tx_id=ABC123`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union
from urllib.parse import unquote, urlsplit

OTPAUTH_SCHEME = "otpauth"
TOTP_HOST = "totp"
ENROLLMENT_TX_ID = "enrollment_tx_id"
INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class TicketSource(str, Enum):
    """Where a resolved ticket came from."""

    TICKET = "ticket"
    URI = "uri"


@dataclass(frozen=True)
class ResolvedTicket:
    ticket: str
    source: TicketSource


@dataclass(frozen=True)
class NoTicket:
    reason: str


TicketResolution = Union[ResolvedTicket, NoTicket]


def parameters_from_uri(uri: str) -> Optional[Dict[str, str]]:
    """Return the query parameters of an `otpauth://totp` URI.

    Returns None when the input is not such a URI, including URIs with a
    malformed percent escape. When a parameter repeats, the last occurrence
    wins; items without a value (no `=`) are skipped.
    """
    scheme, sep, _ = uri.partition(":")
    if not sep or scheme != OTPAUTH_SCHEME:
        return None

    if any(char.isspace() or not char.isprintable() for char in uri):
        return None

    if INVALID_ESCAPE.search(uri):
        return None

    try:
        components = urlsplit(uri)
        host = components.hostname
    except ValueError:
        return None

    if host is None or host.lower() != TOTP_HOST:
        return None

    parameters: Dict[str, str] = {}
    for item in components.query.split("&"):
        name, sep, value = item.partition("=")
        if not sep:
            continue
        parameters[unquote(name)] = unquote(value)
    return parameters


def enrollment_ticket_from_uri(uri: str) -> Optional[str]:
    """Extract the enrollment ticket from an `otpauth://totp` URI, if any."""
    parameters = parameters_from_uri(uri)
    if parameters is None:
        return None
    return parameters.get(ENROLLMENT_TX_ID)


def resolve_ticket(enrollment_ticket: Optional[str], enrollment_uri: Optional[str]) -> TicketResolution:
    """Pick the ticket for an enrollment attempt.

    An explicit ticket always wins and the URI is then never looked at, even
    if the ticket turns out to be empty.
    """
    if enrollment_ticket is not None:
        if not enrollment_ticket:
            return NoTicket("enrollment ticket is empty")
        return ResolvedTicket(enrollment_ticket, TicketSource.TICKET)

    if enrollment_uri is None:
        return NoTicket("neither enrollment ticket nor enrollment URI supplied")

    ticket = enrollment_ticket_from_uri(enrollment_uri)
    if not ticket:
        return NoTicket("enrollment URI carries no enrollment ticket")

    return ResolvedTicket(ticket, TicketSource.URI)
