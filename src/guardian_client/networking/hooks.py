"""Loguru-backed instrumentation hooks for any `Requestable`."""

from __future__ import annotations

from typing import TypeVar

from loguru import logger

from .requestable import Requestable

R = TypeVar("R", bound=Requestable)


def log_request(method: str, url: str, headers: dict) -> None:
    logger.info(f"Request sent: {method} {url}")


def log_response(status: int, headers: dict, body: bytes) -> None:
    if 200 <= status < 300:
        logger.info(f"Response received: HTTP {status} ({len(body)} bytes)")
    else:
        logger.warning(f"Response received: HTTP {status} ({len(body)} bytes)")


def log_error(error: Exception) -> None:
    logger.error(f"Request failed: {error}")


def log_request_hooks(request: R) -> R:
    """Register logging hooks on `request` and return it for chaining.

    Only method, URL, status and sizes are logged; bodies may carry tickets,
    tokens or key material.
    """
    request.on(request=log_request, response=log_response, error=log_error)
    return request
