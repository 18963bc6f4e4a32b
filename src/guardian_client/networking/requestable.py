"""Contract shared by every request-like object of the client."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

from .result import Result

T = TypeVar("T")

# (method, url, headers)
RequestHook = Callable[[str, str, dict], None]
# (status, headers, body)
ResponseHook = Callable[[int, dict, bytes], None]
ErrorHook = Callable[[Exception], None]


class Requestable(Protocol[T]):
    """A request that can be described and started exactly once."""

    @property
    def description(self) -> str:
        ...

    @property
    def debug_description(self) -> str:
        ...

    def on(
        self,
        request: Optional[RequestHook] = None,
        response: Optional[ResponseHook] = None,
        error: Optional[ErrorHook] = None,
    ) -> "Requestable[T]":
        """Register hooks for request sent, response received and network error."""
        ...

    def start(self, callback: Callable[[Result[T]], None]) -> None:
        """Execute the request and deliver the outcome to `callback`."""
        ...
