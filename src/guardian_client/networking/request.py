"""HTTP transport for Guardian API calls.

A `GuardianRequest` describes one outbound call (method, URL, JSON body) and
executes it with urllib, either synchronously through `execute()` or on a
background thread through `start()`.
"""

from __future__ import annotations

import json
import threading
from concurrent.futures import Executor
from http.client import HTTPException
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from loguru import logger
from pydantic import BaseModel, ValidationError

from .errors import InvalidResponse, NetworkError, ServerError, TransportError
from .requestable import ErrorHook, RequestHook, ResponseHook
from .result import Failure, Result, Success

T = TypeVar("T")


class GuardianRequest(Generic[T]):
    """A pending HTTP call whose JSON response decodes into `response_model`."""

    def __init__(
        self,
        method: str,
        url: str,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        response_model: Optional[Type[BaseModel]] = None,
        timeout_seconds: int = 30,
        callback_executor: Optional[Executor] = None,
    ):
        """Initialize the request.

        Args:
            method: HTTP method
            url: Absolute URL of the endpoint
            payload: JSON body, if any
            headers: Extra request headers
            response_model: Pydantic model used to decode a 2xx body
            timeout_seconds: Socket timeout for the exchange
            callback_executor: Executor the `start` callback is submitted to;
                when omitted the callback runs on the worker thread
        """
        self.method = method.upper()
        self.url = url
        self.payload = payload
        self.headers = {"Accept": "application/json", **(headers or {})}
        if payload is not None:
            self.headers.setdefault("Content-Type", "application/json")
        self.response_model = response_model
        self.timeout_seconds = timeout_seconds
        self.callback_executor = callback_executor

        self._request_hook: Optional[RequestHook] = None
        self._response_hook: Optional[ResponseHook] = None
        self._error_hook: Optional[ErrorHook] = None
        self._lock = threading.Lock()
        self._started = False

    @property
    def description(self) -> str:
        return f"{self.method} {self.url}"

    @property
    def debug_description(self) -> str:
        # Body values carry tickets and key material, so only field names are shown
        fields = ", ".join(sorted(self.payload)) if self.payload else "none"
        headers = ", ".join(f"{name}: {value}" for name, value in sorted(self.headers.items()))
        return f"{self.description}\nHeaders: {headers}\nBody fields: {fields}"

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"<GuardianRequest {self.description}>"

    def on(
        self,
        request: Optional[RequestHook] = None,
        response: Optional[ResponseHook] = None,
        error: Optional[ErrorHook] = None,
    ) -> GuardianRequest[T]:
        """Register hooks called when the request is sent, a response arrives or the network fails."""
        if request is not None:
            self._request_hook = request
        if response is not None:
            self._response_hook = response
        if error is not None:
            self._error_hook = error
        return self

    def start(self, callback: Callable[[Result[T]], None]) -> None:
        """Execute the request in a background thread.

        The callback receives the result exactly once, on the worker thread or
        through `callback_executor` when one was given.

        Raises:
            RuntimeError: If the request was already started
        """
        with self._lock:
            if self._started:
                raise RuntimeError(f"Request already started: {self.description}")
            self._started = True

        worker = threading.Thread(target=self._run, args=(callback,), name="guardian-request", daemon=True)
        worker.start()

    def execute(self) -> Result[T]:
        """Perform the HTTP exchange on the calling thread and return its result."""
        data = json.dumps(self.payload).encode("utf-8") if self.payload is not None else None
        try:
            req = Request(self.url, data=data, headers=self.headers, method=self.method)
        except ValueError as e:
            logger.debug(f"{self.description} not sent: {e}")
            return Failure(TransportError(f"Invalid request URL {self.url!r}: {e}"))

        self._fire(self._request_hook, self.method, self.url, dict(self.headers))
        logger.debug(f"Sending {self.description}")

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                status = response.status
                headers = dict(response.headers.items())
                body = response.read()

        except HTTPError as e:
            try:
                body = e.read() or b""
            except (OSError, HTTPException):
                body = b""
            headers = dict(e.headers.items()) if e.headers else {}
            self._fire(self._response_hook, e.code, headers, body)
            logger.debug(f"{self.description} -> HTTP {e.code}")
            return Failure(self._server_error(e.code, body))

        except URLError as e:
            return self._network_failure(NetworkError(e.reason))

        except (OSError, HTTPException) as e:
            return self._network_failure(NetworkError(e))

        self._fire(self._response_hook, status, headers, body)
        logger.debug(f"{self.description} -> HTTP {status}")

        if not 200 <= status < 300:
            return Failure(self._server_error(status, body))

        return self._decode(body)

    def _run(self, callback: Callable[[Result[T]], None]) -> None:
        try:
            result = self.execute()
        except Exception as e:
            logger.exception(f"Unexpected error executing {self.description}")
            result = Failure(TransportError(f"Unexpected error: {e}"))

        if self.callback_executor is not None:
            try:
                self.callback_executor.submit(callback, result)
                return
            except RuntimeError as e:
                # Executor already shut down; deliver on the worker thread instead
                logger.warning(f"Callback executor unavailable for {self.description}: {e}")
        try:
            callback(result)
        except Exception:
            logger.exception(f"Callback for {self.description} raised")

    def _network_failure(self, error: NetworkError) -> Failure:
        self._fire(self._error_hook, error)
        logger.debug(f"{self.description} failed: {error}")
        return Failure(error)

    def _decode(self, body: bytes) -> Result[T]:
        try:
            data = json.loads(body.decode("utf-8")) if body else None
        except ValueError as e:
            return Failure(InvalidResponse(f"body is not JSON ({e})"))

        if self.response_model is None:
            return Success(data)

        try:
            return Success(self.response_model.model_validate(data))
        except ValidationError as e:
            return Failure(InvalidResponse(str(e)))

    @staticmethod
    def _server_error(status: int, body: bytes) -> ServerError:
        """Build a ServerError, reading error details from a JSON body when present."""
        try:
            data = json.loads(body.decode("utf-8")) if body else None
        except ValueError:
            data = None

        if not isinstance(data, dict):
            return ServerError(status)

        code = data.get("errorCode") or data.get("error")
        description = data.get("description") or data.get("message")
        return ServerError(status, code=code, description=description)

    @staticmethod
    def _fire(hook: Optional[Callable[..., None]], *args: Any) -> None:
        if hook is None:
            return
        try:
            hook(*args)
        except Exception as e:
            logger.warning(f"Request hook raised: {e}")
