"""The end result of any `Requestable`.

An instance of `Success` or `Failure` is always sent to the callback of
`Requestable.start`::

    def on_result(result: Result[EnrolledDevice]) -> None:
        match result:
            case Success(payload=device):
                ...  # the request finished successfully
            case Failure(cause=cause):
                ...  # something failed, check `cause`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """The action finished successfully, the result is in `payload`."""

    payload: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.payload


@dataclass(frozen=True)
class Failure:
    """The action failed, the reason is in `cause`."""

    cause: Exception

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self):
        """Raise the failure cause."""
        raise self.cause


Result = Union[Success[T], Failure]
